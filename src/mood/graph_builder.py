# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Inheritance graph building from extracted class declarations."""

import logging
from collections.abc import Iterable

from mood.declaration import ClassDeclaration
from mood.registry import ClassRegistry

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Populate a class registry from class declarations."""

    def __init__(self, registry: ClassRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ClassRegistry:
        return self._registry

    def build(self, declarations: Iterable[ClassDeclaration]) -> ClassRegistry:
        """Add every declaration to the registry in order.

        Args:
            declarations: Extracted class declarations.

        Returns:
            The populated registry.
        """
        for declaration in declarations:
            self.add(declaration)
        return self._registry

    def add(self, declaration: ClassDeclaration) -> None:
        """Record one class declaration.

        Repeated declarations of the same class are additive: counters grow
        and the base gains another child entry.

        Args:
            declaration: Class declaration to record.
        """
        record = self._registry.get_or_create(declaration.name)
        base_name = declaration.base_class or None

        if base_name:
            record.base_class = base_name
            self._registry.get_or_create(base_name).children.append(declaration.name)

        for method in declaration.methods:
            record.total_methods += 1
            # Overrides without a base name are not attributed anywhere.
            if method.is_override and base_name:
                self._registry.get_or_create(base_name).overridden_methods += 1

        for field in declaration.fields:
            record.total_fields += 1
            if field.visibility.is_hidden:
                record.hidden_fields += 1

        logger.debug(
            f"Added class declaration (name={declaration.name} base={base_name} "
            f"methods={len(declaration.methods)} fields={len(declaration.fields)} "
            f"file_path={declaration.file_path})"
        )
