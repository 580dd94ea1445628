"""Programmatic API used by the command line."""

from .analyze import AnalysisResult, FountainAnalyzer

__all__ = ["AnalysisResult", "FountainAnalyzer"]
