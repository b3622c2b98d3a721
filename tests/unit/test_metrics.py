# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
import pytest

from mood.declaration import (
    ClassDeclaration,
    FieldDescriptor,
    MethodDescriptor,
    Visibility,
)
from mood.graph_builder import GraphBuilder
from mood.inheritance import InheritanceAnalyzer
from mood.metrics import MetricsAggregator, RegistryNotAnalyzedError, ratio
from mood.pipeline import compute_metrics
from mood.registry import ClassRecord, ClassRegistry


def _animal_and_dog() -> list[ClassDeclaration]:
    return [
        ClassDeclaration(name="Animal"),
        ClassDeclaration(
            name="Dog",
            base_class="Animal",
            methods=(
                MethodDescriptor("speak", is_override=True),
                MethodDescriptor("fetch"),
            ),
            fields=(FieldDescriptor("__owner", visibility=Visibility.PRIVATE),),
        ),
    ]


def test_met_001_ratio_returns_zero_for_zero_denominator() -> None:
    assert ratio(0, 0) == 0.0
    assert ratio(3, 0) == 0.0
    assert ratio(1, 4) == 0.25


def test_met_002_animal_and_dog_scenario() -> None:
    registry = GraphBuilder(ClassRegistry()).build(_animal_and_dog())
    InheritanceAnalyzer(registry).analyze()

    report = MetricsAggregator(registry).compute()

    animal = registry.get_or_create("Animal")
    dog = registry.get_or_create("Dog")
    assert animal.noc == 1
    assert animal.dit == 0
    assert dog.dit == 1
    assert animal.overridden_methods == 1
    assert dog.inherited_methods == 0
    by_name = {item.name: item for item in report.classes}
    assert by_name["Dog"].ahf == 1.0
    assert by_name["Dog"].mif == 0.0
    assert by_name["Dog"].mhf == 0.0
    assert by_name["Animal"].pof == 0.0


def test_met_003_class_metrics_ratios() -> None:
    report = compute_metrics(
        [
            ClassDeclaration(
                name="Base",
                methods=(MethodDescriptor("a"), MethodDescriptor("b")),
                fields=(
                    FieldDescriptor("_x", visibility=Visibility.PROTECTED),
                    FieldDescriptor("y"),
                    FieldDescriptor("z"),
                ),
            ),
            ClassDeclaration(
                name="Derived",
                base_class="Base",
                methods=(
                    MethodDescriptor("a", is_override=True),
                    MethodDescriptor("b", is_override=True),
                    MethodDescriptor("c"),
                ),
                fields=(FieldDescriptor("w"),),
            ),
        ]
    )

    base, derived = report.classes
    assert base.name == "Base"
    assert base.ahf == pytest.approx(1 / 3)
    assert base.mif == 0.0
    assert base.pof == pytest.approx(2 / (2 * 1))
    assert derived.mif == pytest.approx(2 / 5)
    assert derived.aif == pytest.approx(3 / 4)
    assert derived.pof == 0.0


def test_met_004_mif_is_zero_without_base_or_without_methods() -> None:
    report = compute_metrics(
        [
            ClassDeclaration(name="Solo", methods=(MethodDescriptor("m"),)),
            ClassDeclaration(name="Empty", base_class="Hollow"),
        ]
    )

    by_name = {item.name: item for item in report.classes}
    assert by_name["Solo"].mif == 0.0
    assert by_name["Empty"].mif == 0.0
    assert by_name["Empty"].aif == 0.0


def test_met_005_global_pof_is_weighted_not_mean_of_means() -> None:
    registry = ClassRegistry()
    a = registry.get_or_create("A")
    a.total_methods = 3
    a.overridden_methods = 1
    a.dit = 0
    a.descendant_count = 2
    b = registry.get_or_create("B")
    b.dit = 0
    b.descendant_count = 0

    report = MetricsAggregator(registry).compute()

    assert report.aggregate.global_pof == pytest.approx(1 / 6)
    assert report.classes[0].pof == pytest.approx(1 / 6)
    assert report.classes[1].pof == 0.0


def test_met_006_global_pof_differs_from_average_pof() -> None:
    registry = ClassRegistry()
    records = [
        ClassRecord(name="P", total_methods=1, overridden_methods=1, dit=0, descendant_count=1),
        ClassRecord(name="Q", total_methods=9, overridden_methods=0, dit=0, descendant_count=1),
    ]
    for record in records:
        target = registry.get_or_create(record.name)
        target.total_methods = record.total_methods
        target.overridden_methods = record.overridden_methods
        target.dit = record.dit
        target.descendant_count = record.descendant_count

    report = MetricsAggregator(registry).compute()

    assert report.aggregate.global_pof == pytest.approx(1 / 10)
    mean_pof = sum(item.pof for item in report.classes) / 2
    assert mean_pof == pytest.approx(0.5)


def test_met_007_averages_include_phantom_base_records() -> None:
    report = compute_metrics(
        [
            ClassDeclaration(
                name="Child",
                base_class="Phantom",
                fields=(FieldDescriptor("_a", visibility=Visibility.PROTECTED),),
            )
        ]
    )

    aggregate = report.aggregate
    assert aggregate.class_count == 2
    assert aggregate.average_dit == pytest.approx(0.5)
    assert aggregate.total_noc == 1
    assert aggregate.average_ahf == pytest.approx(0.5)
    assert aggregate.average_mhf == 0.0
    assert [item.name for item in report.classes] == ["Child", "Phantom"]


def test_met_008_empty_registry_yields_zero_aggregates() -> None:
    report = MetricsAggregator(ClassRegistry()).compute()

    assert report.classes == []
    assert report.aggregate.class_count == 0
    assert report.aggregate.average_dit == 0.0
    assert report.aggregate.global_pof == 0.0


def test_met_009_compute_requires_inheritance_analysis() -> None:
    registry = GraphBuilder(ClassRegistry()).build(_animal_and_dog())

    with pytest.raises(RegistryNotAnalyzedError):
        MetricsAggregator(registry).compute()


def test_met_010_cyclic_registry_produces_finite_metrics() -> None:
    report = compute_metrics(
        [
            ClassDeclaration(name="A", base_class="B", methods=(MethodDescriptor("m", True),)),
            ClassDeclaration(name="B", base_class="A", methods=(MethodDescriptor("n", True),)),
        ]
    )

    by_name = {item.name: item for item in report.classes}
    assert by_name["A"].dit == 1
    assert by_name["B"].dit == 1
    assert 0.0 <= report.aggregate.global_pof <= 1.0
