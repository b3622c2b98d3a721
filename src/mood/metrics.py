# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Per-class and population MOOD metrics derived from an analyzed registry."""

import logging
from dataclasses import dataclass

from mood.registry import ClassRecord, ClassRegistry

logger = logging.getLogger(__name__)


class RegistryNotAnalyzedError(RuntimeError):
    """Represent a metrics request on a registry without inheritance analysis."""


@dataclass(frozen=True)
class ClassMetrics:
    """Represent the metric values of one class.

    Attributes:
        name: Class name.
        dit: Depth in inheritance tree.
        noc: Number of direct children.
        mhf: Method hiding factor (0..1).
        ahf: Attribute hiding factor (0..1).
        mif: Method inheritance factor (0..1).
        aif: Attribute inheritance factor (0..1).
        pof: Polymorphism factor (0..1).
    """

    name: str
    dit: int
    noc: int
    mhf: float
    ahf: float
    mif: float
    aif: float
    pof: float


@dataclass(frozen=True)
class AggregateMetrics:
    """Represent population-wide metrics.

    Attributes:
        class_count: Number of registered classes.
        average_dit: Mean DIT over all classes.
        total_noc: Sum of NOC over all classes.
        average_mhf: Mean MHF over all classes.
        average_ahf: Mean AHF over all classes.
        average_mif: Mean MIF over all classes.
        average_aif: Mean AIF over all classes.
        global_pof: Total overrides over total override opportunities.
    """

    class_count: int
    average_dit: float
    total_noc: int
    average_mhf: float
    average_ahf: float
    average_mif: float
    average_aif: float
    global_pof: float


@dataclass(frozen=True)
class MetricsReport:
    """Represent per-class metrics sorted by name and their aggregate."""

    classes: list[ClassMetrics]
    aggregate: AggregateMetrics


def ratio(numerator: int, denominator: int) -> float:
    """Divide, returning 0.0 for a zero denominator."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def method_hiding_factor(record: ClassRecord) -> float:
    return ratio(record.hidden_methods, record.total_methods)


def attribute_hiding_factor(record: ClassRecord) -> float:
    return ratio(record.hidden_fields, record.total_fields)


def method_inheritance_factor(record: ClassRecord) -> float:
    return ratio(record.inherited_methods, record.total_methods + record.inherited_methods)


def attribute_inheritance_factor(record: ClassRecord) -> float:
    return ratio(record.inherited_fields, record.total_fields + record.inherited_fields)


def polymorphism_factor(record: ClassRecord) -> float:
    descendants = record.descendant_count or 0
    if record.total_methods <= 0 or descendants <= 0:
        return 0.0
    return record.overridden_methods / (record.total_methods * descendants)


class MetricsAggregator:
    """Derive MOOD metrics from an analyzed class registry."""

    def __init__(self, registry: ClassRegistry) -> None:
        self._registry = registry

    def compute(self) -> MetricsReport:
        """Compute per-class and aggregate metrics.

        Returns:
            Per-class metrics sorted by class name and population aggregates.

        Raises:
            RegistryNotAnalyzedError: If any record lacks DIT or descendant count.
        """
        records = self._registry.records()
        pending = [
            record.name
            for record in records
            if record.dit is None or record.descendant_count is None
        ]
        if pending:
            raise RegistryNotAnalyzedError(
                f"Inheritance analysis has not run for {len(pending)} classes "
                f"(first={pending[0]})"
            )

        classes = [self._class_metrics(record) for record in records]
        aggregate = self._aggregate(records=records, classes=classes)
        logger.debug(
            f"Metrics computed (classes={aggregate.class_count} "
            f"global_pof={aggregate.global_pof:.4f})"
        )
        return MetricsReport(classes=classes, aggregate=aggregate)

    def _class_metrics(self, record: ClassRecord) -> ClassMetrics:
        return ClassMetrics(
            name=record.name,
            dit=record.dit or 0,
            noc=record.noc,
            mhf=method_hiding_factor(record),
            ahf=attribute_hiding_factor(record),
            mif=method_inheritance_factor(record),
            aif=attribute_inheritance_factor(record),
            pof=polymorphism_factor(record),
        )

    def _aggregate(
        self, records: list[ClassRecord], classes: list[ClassMetrics]
    ) -> AggregateMetrics:
        count = len(classes)
        if count == 0:
            return AggregateMetrics(
                class_count=0,
                average_dit=0.0,
                total_noc=0,
                average_mhf=0.0,
                average_ahf=0.0,
                average_mif=0.0,
                average_aif=0.0,
                global_pof=0.0,
            )

        # Weighted over override opportunities, not a mean of per-class POF.
        possible_overrides = sum(
            record.total_methods * (record.descendant_count or 0) for record in records
        )
        overridden = sum(record.overridden_methods for record in records)

        return AggregateMetrics(
            class_count=count,
            average_dit=sum(item.dit for item in classes) / count,
            total_noc=sum(item.noc for item in classes),
            average_mhf=sum(item.mhf for item in classes) / count,
            average_ahf=sum(item.ahf for item in classes) / count,
            average_mif=sum(item.mif for item in classes) / count,
            average_aif=sum(item.aif for item in classes) / count,
            global_pof=ratio(overridden, possible_overrides),
        )
