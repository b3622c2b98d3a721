# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Source file discovery with gitignore-style exclusion rules."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "tests/",
    "test/",
    "docs/",
    ".git/",
    "bin/",
    "obj/",
    "build/",
    "dist/",
    ".venv/",
    "venv/",
    "__pycache__/",
    "conftest.py",
    "setup.py",
)


class IgnoreMatcher:
    """Match project paths against gitignore-style patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        """Initialize matcher.

        Args:
            spec: Compiled gitignore matcher.
        """
        self._spec = spec

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> "IgnoreMatcher":
        return cls(spec=pathspec.GitIgnoreSpec.from_lines(list(patterns)))

    @classmethod
    def from_project_root(
        cls,
        input_root: Path,
        extra_patterns: Iterable[str] = (),
        use_gitignore: bool = True,
    ) -> "IgnoreMatcher":
        """Build matcher from explicit patterns and nested .gitignore files.

        Args:
            input_root: Project root.
            extra_patterns: Patterns applied before any .gitignore rules.
            use_gitignore: Whether to read .gitignore files under the root.

        Returns:
            Configured ignore matcher.

        Raises:
            OSError: If .gitignore files cannot be read.
            UnicodeDecodeError: If .gitignore files contain invalid UTF-8.
        """
        patterns: list[str] = list(extra_patterns)
        if use_gitignore:
            for ignore_path in sorted(input_root.rglob(".gitignore")):
                base = ignore_path.parent.relative_to(input_root).as_posix()
                if base == ".":
                    base = ""
                lines = ignore_path.read_text(encoding="utf-8").splitlines()
                for line in lines:
                    patterns.append(_translate_gitignore_line(line=line, base=base))
        return cls.from_patterns(patterns)

    def matches(self, relative_path: str, is_dir: bool) -> bool:
        """Check whether a path should be ignored.

        Directories are matched with a trailing slash so directory-only
        patterns such as ``build/`` apply to them.

        Args:
            relative_path: Project-relative POSIX path.
            is_dir: Whether the path is a directory.

        Returns:
            True when path should be ignored.
        """
        candidate = relative_path.replace(os.sep, "/").strip("/")
        if not candidate:
            return False
        return self._spec.match_file(f"{candidate}/" if is_dir else candidate)


class SourceDiscovery:
    """Enumerate source files beneath a root, skipping ignored paths."""

    def __init__(self, matcher: IgnoreMatcher, suffix: str = ".py") -> None:
        self._matcher = matcher
        self._suffix = suffix

    def discover(self, root_path: Path) -> list[Path]:
        """Return matching source files in sorted order.

        Ignored directories are pruned without descending into them.
        Directories that cannot be listed are logged and skipped.

        Args:
            root_path: Root directory to search.

        Returns:
            Sorted source file paths.
        """
        files: list[Path] = []
        skipped = 0
        queue: list[Path] = [root_path]
        while queue:
            current = queue.pop(0)
            try:
                children = sorted(current.iterdir(), key=lambda item: item.name)
            except OSError as exc:
                logger.warning(f"Skipping unreadable directory (path={current} error={exc})")
                skipped += 1
                continue
            for child in children:
                relative_child = child.relative_to(root_path).as_posix()
                is_dir = child.is_dir()
                if self._matcher.matches(relative_path=relative_child, is_dir=is_dir):
                    skipped += 1
                    continue
                if is_dir:
                    if not child.is_symlink():
                        queue.append(child)
                    continue
                if child.suffix == self._suffix:
                    files.append(child)

        logger.info(
            f"Source discovery completed (path={root_path} files={len(files)} skipped={skipped})"
        )
        return sorted(files)


def _translate_gitignore_line(line: str, base: str) -> str:
    """Rewrite one line of a nested .gitignore relative to the project root.

    Patterns without an inner slash match at any depth below the directory
    holding the .gitignore, so they become ``<base>/**/<pattern>``; patterns
    with an inner or leading slash are anchored at ``<base>``.

    Args:
        line: Line as written in the .gitignore file.
        base: Directory of the .gitignore relative to the project root.

    Returns:
        Root-relative pattern line.
    """
    stripped = line.strip()
    if not base or not stripped or stripped.startswith("#"):
        return line
    if line.startswith(("\\!", "\\#")):
        return f"{base}/**/{line}"
    prefix = "!" if line.startswith("!") else ""
    pattern = line[len(prefix):]
    if pattern.startswith("/"):
        return f"{prefix}{base}{pattern}"
    if "/" in pattern.rstrip("/"):
        return f"{prefix}{base}/{pattern}"
    return f"{prefix}{base}/**/{pattern}"
