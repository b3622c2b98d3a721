# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Language analyzers producing class declarations."""

from mood.analyzers.python import PythonAnalyzer

__all__ = ["PythonAnalyzer"]
