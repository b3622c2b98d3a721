# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Python source analyzer extracting class declarations."""

import ast
import logging
from collections.abc import Iterator
from pathlib import Path

from mood.declaration import (
    ClassDeclaration,
    FieldDescriptor,
    MethodDescriptor,
    Visibility,
)

logger = logging.getLogger(__name__)

OVERRIDE_DECORATORS: frozenset[str] = frozenset(
    {"override", "typing.override", "typing_extensions.override"}
)
INIT_METHOD = "__init__"
STATEMENT_BLOCKS: tuple[str, ...] = ("body", "handlers", "orelse", "finalbody", "cases")
SCOPE_NODES = (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)


def iter_statements(body: list[ast.stmt], enter_scopes: bool = True) -> Iterator[ast.stmt]:
    """Yield statements of ``body`` and its nested blocks in source order.

    Only statement blocks are followed, never expressions, so deeply nested
    expressions do not grow the traversal. With ``enter_scopes`` disabled,
    bodies of nested functions and classes are not visited.

    Args:
        body: Statement list to traverse.
        enter_scopes: Whether to descend into nested function and class bodies.

    Yields:
        Statements in pre-order.
    """
    pending: list[ast.AST] = list(reversed(body))
    while pending:
        node = pending.pop()
        if isinstance(node, ast.stmt):
            yield node
        if not enter_scopes and isinstance(node, SCOPE_NODES):
            continue
        nested: list[ast.AST] = []
        for block in STATEMENT_BLOCKS:
            children = getattr(node, block, None)
            if isinstance(children, list):
                nested.extend(children)
        pending.extend(reversed(nested))


def visibility_of(name: str) -> Visibility:
    """Infer member visibility from Python naming conventions.

    ``__name`` is private (name-mangled), ``_name`` is protected, dunder
    names and everything else are public.
    """
    if name.startswith("__") and name.endswith("__") and len(name) > 4:
        return Visibility.PUBLIC
    if name.startswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


class PythonAnalyzer:
    """Analyze Python files and extract class declarations."""

    def analyze_file(self, root_path: Path, file_path: Path) -> list[ClassDeclaration]:
        """Extract every class declared in one Python file.

        Nested classes, including classes defined inside functions, are
        reported as separate declarations in source order.

        Args:
            root_path: Project root used for relative paths.
            file_path: File to analyze.

        Returns:
            Extracted class declarations.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
            SyntaxError: If the file is not valid Python.
            ValueError: If the source contains null bytes.
            RecursionError: If the parser cannot build the tree for deeply
                nested source.
        """
        source = file_path.read_text(encoding="utf-8")
        tree = ast.parse(source, filename=str(file_path))
        relative_path = file_path.relative_to(root_path).as_posix()
        return [
            self._build_declaration(statement, relative_path)
            for statement in iter_statements(tree.body)
            if isinstance(statement, ast.ClassDef)
        ]

    def _build_declaration(self, node: ast.ClassDef, file_path: str) -> ClassDeclaration:
        base_class = ast.unparse(node.bases[0]) if node.bases else None
        methods: list[MethodDescriptor] = []
        fields: list[FieldDescriptor] = []
        seen_fields: set[str] = set()

        for statement in node.body:
            if isinstance(statement, (ast.FunctionDef, ast.AsyncFunctionDef)):
                methods.append(
                    MethodDescriptor(
                        name=statement.name,
                        is_override=self._is_override(statement),
                        visibility=visibility_of(statement.name),
                    )
                )
            for name in self._class_level_targets(statement):
                if name not in seen_fields:
                    seen_fields.add(name)
                    fields.append(FieldDescriptor(name=name, visibility=visibility_of(name)))

        for statement in node.body:
            if isinstance(statement, (ast.FunctionDef, ast.AsyncFunctionDef)) and (
                statement.name == INIT_METHOD
            ):
                for name in self._instance_attributes(statement):
                    if name not in seen_fields:
                        seen_fields.add(name)
                        fields.append(
                            FieldDescriptor(name=name, visibility=visibility_of(name))
                        )

        return ClassDeclaration(
            name=node.name,
            base_class=base_class,
            methods=tuple(methods),
            fields=tuple(fields),
            file_path=file_path,
        )

    def _is_override(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> bool:
        for decorator in node.decorator_list:
            target = decorator.func if isinstance(decorator, ast.Call) else decorator
            if ast.unparse(target) in OVERRIDE_DECORATORS:
                return True
        return False

    def _class_level_targets(self, statement: ast.stmt) -> list[str]:
        if isinstance(statement, ast.Assign):
            return [
                target.id for target in statement.targets if isinstance(target, ast.Name)
            ]
        if isinstance(statement, ast.AnnAssign) and isinstance(statement.target, ast.Name):
            return [statement.target.id]
        return []

    def _instance_attributes(
        self, node: ast.FunctionDef | ast.AsyncFunctionDef
    ) -> list[str]:
        if not node.args.args:
            return []
        receiver = node.args.args[0].arg
        names: list[str] = []
        for statement in iter_statements(node.body, enter_scopes=False):
            targets: list[ast.expr] = []
            if isinstance(statement, ast.Assign):
                targets = list(statement.targets)
            elif isinstance(statement, (ast.AnnAssign, ast.AugAssign)):
                targets = [statement.target]
            for target in targets:
                if (
                    isinstance(target, ast.Attribute)
                    and isinstance(target.value, ast.Name)
                    and target.value.id == receiver
                ):
                    names.append(target.attr)
        return names
