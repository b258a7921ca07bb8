"""
Core pattern learning.

This package contains signature construction, the pattern store and its
derived indices, the learner, the match engine, statistics, and the
extraction/auto-tiling passes built on top of them.
"""

from .signature import InvalidContext, make_signature, parse_signature
from .pattern import Pattern
from .pattern_store import PatternStore
from .learner import PatternLearner
from .match_engine import MatchEngine, MatchResult, NO_TILE
from .pattern_stats import PatternStats, StructuralIssue
from .pattern_database import PatternDatabase, SnapshotError
from .extractor import PatternExtractor, extract_neighborhood
from .autotiler import AutoTiler, AutoTileResult

__all__ = [
    "InvalidContext",
    "make_signature",
    "parse_signature",
    "Pattern",
    "PatternStore",
    "PatternLearner",
    "MatchEngine",
    "MatchResult",
    "NO_TILE",
    "PatternStats",
    "StructuralIssue",
    "PatternDatabase",
    "SnapshotError",
    "PatternExtractor",
    "extract_neighborhood",
    "AutoTiler",
    "AutoTileResult",
]
