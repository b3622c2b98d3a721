# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Class registry holding the inheritance graph state."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class ClassRecord:
    """Represent one class node of the inheritance graph.

    Attributes:
        name: Unique class name.
        base_class: Direct base class name, if any. The base may be a class
            that was only ever referenced and never declared.
        children: Names of classes declaring this class as their base. Each
            processed subclass declaration appends one entry.
        total_methods: Methods declared in this class.
        hidden_methods: Hidden methods; never incremented.
        inherited_methods: ``total_methods`` of the direct base.
        overridden_methods: Overrides declared against this class by its
            direct subclasses.
        total_fields: Fields declared in this class.
        hidden_fields: Private or protected fields.
        inherited_fields: ``total_fields`` of the direct base.
        dit: Depth in inheritance tree; ``None`` until analyzed.
        descendant_count: Transitive descendant count; ``None`` until analyzed.
    """

    name: str
    base_class: str | None = None
    children: list[str] = field(default_factory=list)
    total_methods: int = 0
    hidden_methods: int = 0
    inherited_methods: int = 0
    overridden_methods: int = 0
    total_fields: int = 0
    hidden_fields: int = 0
    inherited_fields: int = 0
    dit: int | None = None
    descendant_count: int | None = None

    @property
    def noc(self) -> int:
        """Number of children."""
        return len(self.children)


class ClassRegistry:
    """Map class names to their records."""

    def __init__(self) -> None:
        self._records: dict[str, ClassRecord] = {}

    def get_or_create(self, name: str) -> ClassRecord:
        """Return the record for ``name``, creating an empty one if missing.

        Args:
            name: Class name.

        Returns:
            The registered record.
        """
        record = self._records.get(name)
        if record is None:
            record = ClassRecord(name=name)
            self._records[name] = record
            logger.debug(f"Registered class (name={name})")
        return record

    def get(self, name: str) -> ClassRecord | None:
        return self._records.get(name)

    def records(self) -> list[ClassRecord]:
        """Return all records sorted by class name."""
        return [self._records[name] for name in sorted(self._records)]

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ClassRecord]:
        return iter(self._records.values())
