# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from pathlib import Path

import pytest

from mood.analyzers import PythonAnalyzer
from mood.analyzers.python import visibility_of
from mood.declaration import Visibility


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_pya_001_visibility_follows_naming_conventions() -> None:
    assert visibility_of("name") == Visibility.PUBLIC
    assert visibility_of("_name") == Visibility.PROTECTED
    assert visibility_of("__name") == Visibility.PRIVATE
    assert visibility_of("__init__") == Visibility.PUBLIC


def test_pya_002_extracts_base_methods_overrides_and_fields(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    source_file = project_root / "pkg" / "animals.py"
    _write_file(
        source_file,
        "\n".join(
            [
                "from typing import override",
                "",
                "class Animal:",
                "    kind: str = 'animal'",
                "",
                "    def speak(self) -> str:",
                "        return ''",
                "",
                "class Dog(Animal, Comparable):",
                "    _registry = {}",
                "",
                "    def __init__(self, name: str) -> None:",
                "        self.__name = name",
                "        self.age = 0",
                "        self._registry = {}",
                "",
                "    @override",
                "    def speak(self) -> str:",
                "        return 'woof'",
                "",
                "    async def _fetch(self) -> None:",
                "        pass",
            ]
        ),
    )

    declarations = PythonAnalyzer().analyze_file(project_root, source_file)

    assert [declaration.name for declaration in declarations] == ["Animal", "Dog"]
    animal, dog = declarations
    assert animal.base_class is None
    assert animal.file_path == "pkg/animals.py"
    assert [method.name for method in animal.methods] == ["speak"]
    assert [field.name for field in animal.fields] == ["kind"]

    assert dog.base_class == "Animal"
    assert [(m.name, m.is_override, m.visibility) for m in dog.methods] == [
        ("__init__", False, Visibility.PUBLIC),
        ("speak", True, Visibility.PUBLIC),
        ("_fetch", False, Visibility.PROTECTED),
    ]
    assert [(f.name, f.visibility) for f in dog.fields] == [
        ("_registry", Visibility.PROTECTED),
        ("__name", Visibility.PRIVATE),
        ("age", Visibility.PUBLIC),
    ]


def test_pya_003_qualified_override_and_dotted_base(tmp_path: Path) -> None:
    source_file = tmp_path / "models.py"
    _write_file(
        source_file,
        "\n".join(
            [
                "import typing",
                "import abc",
                "",
                "class Shape(abc.ABC):",
                "    @typing.override",
                "    def area(self) -> float:",
                "        return 0.0",
                "",
                "    @staticmethod",
                "    def unit() -> 'Shape':",
                "        return Shape()",
            ]
        ),
    )

    (shape,) = PythonAnalyzer().analyze_file(tmp_path, source_file)

    assert shape.base_class == "abc.ABC"
    assert [method.is_override for method in shape.methods] == [True, False]


def test_pya_004_nested_classes_are_extracted(tmp_path: Path) -> None:
    source_file = tmp_path / "nested.py"
    _write_file(
        source_file,
        "\n".join(
            [
                "class Outer:",
                "    class Inner(Outer):",
                "        pass",
                "",
                "def factory():",
                "    class Local:",
                "        value = 1",
                "    return Local",
            ]
        ),
    )

    declarations = PythonAnalyzer().analyze_file(tmp_path, source_file)

    assert [declaration.name for declaration in declarations] == ["Outer", "Inner", "Local"]
    assert declarations[1].base_class == "Outer"
    assert [field.name for field in declarations[2].fields] == ["value"]


def test_pya_005_syntax_error_propagates(tmp_path: Path) -> None:
    source_file = tmp_path / "broken.py"
    _write_file(source_file, "class Broken(:\n    pass\n")

    with pytest.raises(SyntaxError):
        PythonAnalyzer().analyze_file(tmp_path, source_file)


def test_pya_006_long_expressions_do_not_exhaust_recursion(tmp_path: Path) -> None:
    source_file = tmp_path / "long.py"
    _write_file(
        source_file,
        "class Good:\n    pass\n\nX = " + " + ".join(["1"] * 980) + "\n",
    )

    declarations = PythonAnalyzer().analyze_file(tmp_path, source_file)

    assert [declaration.name for declaration in declarations] == ["Good"]


def test_pya_007_classes_in_compound_statements_are_extracted(tmp_path: Path) -> None:
    source_file = tmp_path / "compound.py"
    _write_file(
        source_file,
        "\n".join(
            [
                "try:",
                "    class Fast(Base):",
                "        pass",
                "except ImportError:",
                "    class Slow(Base):",
                "        pass",
                "if True:",
                "    pass",
                "else:",
                "    class Never:",
                "        pass",
            ]
        ),
    )

    declarations = PythonAnalyzer().analyze_file(tmp_path, source_file)

    assert [declaration.name for declaration in declarations] == ["Fast", "Slow", "Never"]


def test_pya_008_nested_scopes_in_init_do_not_add_fields(tmp_path: Path) -> None:
    source_file = tmp_path / "widget.py"
    _write_file(
        source_file,
        "\n".join(
            [
                "class Widget:",
                "    def __init__(self, flag):",
                "        if flag:",
                "            self.enabled = True",
                "        def callback(self):",
                "            self.clicked = True",
                "        class Inner:",
                "            def __init__(self):",
                "                self.inner_value = 1",
                "        self.callback = callback",
            ]
        ),
    )

    declarations = PythonAnalyzer().analyze_file(tmp_path, source_file)

    widget = declarations[0]
    assert widget.name == "Widget"
    assert [field.name for field in widget.fields] == ["enabled", "callback"]
    assert [declaration.name for declaration in declarations] == ["Widget", "Inner"]
