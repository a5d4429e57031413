"""Prism requirements analysis engine.

Finds ambiguities in natural-language requirement statements, extracts
actors/actions/objects, scores completeness and user-story quality, and
generates UML text, pseudocode and test-case stubs. An LLM can optionally
enrich each stage; without one the engine is fully deterministic.

Usage::

    from prism import analyze_sync, AnalysisOptions

    report = analyze_sync("The system should be fast", options=AnalysisOptions(tests=True))
    print(report.result.ambiguities)
"""

from prism.analyzer.models import AnalysisResult, ExtractedEntities
from prism.config import Config
from prism.engine import AnalysisOptions, AnalysisPreset, AnalysisReport, analyze, analyze_sync

__version__ = "0.3.0"

__all__ = [
    "analyze",
    "analyze_sync",
    "AnalysisOptions",
    "AnalysisPreset",
    "AnalysisReport",
    "AnalysisResult",
    "Config",
    "ExtractedEntities",
]
