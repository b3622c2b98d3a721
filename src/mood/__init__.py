# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Object-oriented design metrics (MOOD suite) over class inheritance graphs."""

from mood.declaration import (
    AnalyzerError,
    ClassDeclaration,
    FieldDescriptor,
    MethodDescriptor,
    Visibility,
)
from mood.graph_builder import GraphBuilder
from mood.inheritance import InheritanceAnalyzer
from mood.metrics import (
    AggregateMetrics,
    ClassMetrics,
    MetricsAggregator,
    MetricsReport,
    RegistryNotAnalyzedError,
)
from mood.registry import ClassRecord, ClassRegistry
from mood.report import ReportFormatter

__all__ = [
    "AggregateMetrics",
    "AnalyzerError",
    "ClassDeclaration",
    "ClassMetrics",
    "ClassRecord",
    "ClassRegistry",
    "FieldDescriptor",
    "GraphBuilder",
    "InheritanceAnalyzer",
    "MethodDescriptor",
    "MetricsAggregator",
    "MetricsReport",
    "RegistryNotAnalyzedError",
    "ReportFormatter",
    "Visibility",
]
