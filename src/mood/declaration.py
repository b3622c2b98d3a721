# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Analyzer interfaces and DTOs for class declaration extraction."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol


class Visibility(str, Enum):
    """Access level of a class member."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    OTHER = "other"

    @property
    def is_hidden(self) -> bool:
        return self in (Visibility.PRIVATE, Visibility.PROTECTED)


@dataclass(frozen=True)
class MethodDescriptor:
    """Describe one method declared directly in a class body.

    Attributes:
        name: Method name as written in source.
        is_override: Whether the method is marked as overriding a base method.
        visibility: Member access level.
    """

    name: str
    is_override: bool = False
    visibility: Visibility = Visibility.PUBLIC


@dataclass(frozen=True)
class FieldDescriptor:
    """Describe one field declared by a class."""

    name: str
    visibility: Visibility = Visibility.PUBLIC


@dataclass(frozen=True)
class ClassDeclaration:
    """Represent one class declaration extracted from a source unit.

    Attributes:
        name: Declared class name; never empty.
        base_class: First declared base class name, ``None`` when the class
            declares no explicit base.
        methods: Methods in declaration order.
        fields: Fields in declaration order.
        file_path: Project-relative path of the source unit.
    """

    name: str
    base_class: str | None = None
    methods: tuple[MethodDescriptor, ...] = ()
    fields: tuple[FieldDescriptor, ...] = ()
    file_path: str = ""


@dataclass(frozen=True)
class AnalyzerError:
    """Represent an analyzer error for one file."""

    file_path: str
    message: str


class Analyzer(Protocol):
    """Language-agnostic class declaration analyzer contract."""

    def analyze_file(self, root_path: Path, file_path: Path) -> list[ClassDeclaration]:
        """Extract class declarations from one source file.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
            SyntaxError: If the file cannot be parsed.
        """
