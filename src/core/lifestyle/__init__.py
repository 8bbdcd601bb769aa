"""생활 패턴 평가 Core 패키지 — 공개 API"""

from src.core.lifestyle.snapshot import (
    ActivityRecord,
    ActivityWindow,
    PlayerPatternSnapshot,
    RelationshipSummary,
    SocialPattern,
    build_pattern_snapshot,
    build_relationship_summaries,
    is_after_2am,
    is_before_midnight,
)
from src.core.lifestyle.base import PatternEvaluator
from src.core.lifestyle.engine import (
    EvaluatorRegistry,
    LifestyleEvaluationResult,
    StatEvaluationResult,
    default_registry,
    evaluate_all_patterns,
    evaluate_stat,
)

__all__ = [
    "ActivityRecord",
    "ActivityWindow",
    "PlayerPatternSnapshot",
    "RelationshipSummary",
    "SocialPattern",
    "build_pattern_snapshot",
    "build_relationship_summaries",
    "is_after_2am",
    "is_before_midnight",
    "PatternEvaluator",
    "EvaluatorRegistry",
    "LifestyleEvaluationResult",
    "StatEvaluationResult",
    "default_registry",
    "evaluate_all_patterns",
    "evaluate_stat",
]
