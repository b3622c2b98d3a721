# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Inheritance analysis over a populated class registry."""

import logging

from mood.registry import ClassRegistry

logger = logging.getLogger(__name__)


class InheritanceAnalyzer:
    """Compute depth, inherited counters and descendant counts for classes.

    Every traversal keeps its own visited set, so cyclic base/child links
    produced by malformed input terminate instead of looping.
    """

    def __init__(self, registry: ClassRegistry) -> None:
        self._registry = registry

    def analyze(self) -> ClassRegistry:
        """Populate ``dit``, inherited counters and ``descendant_count``.

        Returns:
            The analyzed registry.
        """
        logger.info(f"Calculating DIT (classes={len(self._registry)})")
        for record in self._registry:
            record.dit = self.depth_in_tree(record.name)

        logger.info("Calculating inheritance")
        for record in self._registry:
            self._resolve_inherited(record.name)

        logger.info("Calculating descendant counts")
        for record in self._registry:
            record.descendant_count = self.descendant_count(record.name)
        return self._registry

    def depth_in_tree(self, name: str) -> int:
        """Count base links walked upward from ``name``.

        The walk stops at a class without a tracked base, or before stepping
        onto a class already visited during this walk.

        Args:
            name: Class name.

        Returns:
            Number of edges walked; 0 for unknown classes.
        """
        current = self._registry.get(name)
        if current is None:
            return 0
        depth = 0
        visited = {current.name}
        while current.base_class and current.base_class in self._registry:
            if current.base_class in visited:
                logger.debug(f"Inheritance cycle detected (class={name} at={current.base_class})")
                break
            visited.add(current.base_class)
            depth += 1
            current = self._registry.get_or_create(current.base_class)
        return depth

    def descendant_count(self, name: str) -> int:
        """Count all descendants of ``name`` across every level.

        Each child link reached from a not-yet-expanded class counts once;
        a class is expanded at most once per call, so cycles add a single
        count for the closing edge and stop there.

        Args:
            name: Class name.

        Returns:
            Transitive descendant count; 0 for unknown classes.
        """
        if name not in self._registry:
            return 0
        visited = {name}
        pending = list(self._registry.get_or_create(name).children)
        count = 0
        while pending:
            child = pending.pop()
            count += 1
            if child in visited:
                continue
            visited.add(child)
            record = self._registry.get(child)
            if record is not None:
                pending.extend(record.children)
        return count

    def _resolve_inherited(self, name: str) -> None:
        record = self._registry.get_or_create(name)
        if not record.base_class:
            return
        base = self._registry.get(record.base_class)
        if base is None:
            return
        record.inherited_methods = base.total_methods
        record.inherited_fields = base.total_fields
