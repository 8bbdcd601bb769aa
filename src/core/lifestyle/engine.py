"""생활 패턴 평가 엔진

등록된 평가기를 스탯별로 실행해 current 변동량 + 내역을 모은다.
어떤 스탯을 평가할지는 등록된 평가기가 결정한다.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from src.core.lifestyle.ambition import AMBITION_EVALUATORS
from src.core.lifestyle.base import PatternEvaluator
from src.core.lifestyle.creativity import CREATIVITY_EVALUATORS
from src.core.lifestyle.empathy import EMPATHY_EVALUATORS
from src.core.lifestyle.poise import POISE_EVALUATORS
from src.core.lifestyle.snapshot import PlayerPatternSnapshot
from src.core.lifestyle.vitality import VITALITY_EVALUATORS
from src.core.lifestyle.wit import WIT_EVALUATORS
from src.core.stats.models import StatChangeComponent, StatName


@dataclass(frozen=True)
class StatEvaluationResult:
    stat: StatName
    total_change: float
    components: List[StatChangeComponent] = field(default_factory=list)


@dataclass(frozen=True)
class LifestyleEvaluationResult:
    changes: Dict[StatName, float] = field(default_factory=dict)
    components: Dict[StatName, List[StatChangeComponent]] = field(default_factory=dict)


class EvaluatorRegistry:
    """스탯 → 평가기 목록 (등록 순서 유지)"""

    def __init__(self, evaluators: Optional[Iterable[PatternEvaluator]] = None) -> None:
        self._by_stat: Dict[StatName, List[PatternEvaluator]] = {}
        for evaluator in evaluators or []:
            self.register(evaluator)

    def register(self, evaluator: PatternEvaluator) -> None:
        existing = self._by_stat.setdefault(evaluator.stat, [])
        if any(e.id == evaluator.id for e in existing):
            raise ValueError(f"Duplicate evaluator id: {evaluator.id}")
        existing.append(evaluator)

    def for_stat(self, stat: StatName) -> List[PatternEvaluator]:
        return list(self._by_stat.get(stat, []))

    def stats(self) -> List[StatName]:
        return list(self._by_stat)


default_registry = EvaluatorRegistry(
    [
        *VITALITY_EVALUATORS,
        *AMBITION_EVALUATORS,
        *EMPATHY_EVALUATORS,
        *POISE_EVALUATORS,
        *CREATIVITY_EVALUATORS,
        *WIT_EVALUATORS,
    ]
)


def evaluate_stat(
    stat: StatName,
    snapshot: PlayerPatternSnapshot,
    registry: Optional[EvaluatorRegistry] = None,
) -> StatEvaluationResult:
    """한 스탯의 평가기 전부 실행. 0인 결과는 버린다."""
    registry = registry or default_registry
    total = 0.0
    components: List[StatChangeComponent] = []
    for evaluator in registry.for_stat(stat):
        value = evaluator.evaluate(snapshot)
        if value != 0:
            total += value
            components.append(evaluator.get_component(snapshot, value))
    return StatEvaluationResult(stat=stat, total_change=total, components=components)


def evaluate_all_patterns(
    snapshot: PlayerPatternSnapshot,
    registry: Optional[EvaluatorRegistry] = None,
) -> LifestyleEvaluationResult:
    """수면 시 호출되는 진입점."""
    registry = registry or default_registry
    changes: Dict[StatName, float] = {}
    components: Dict[StatName, List[StatChangeComponent]] = {}
    for stat in registry.stats():
        result = evaluate_stat(stat, snapshot, registry)
        if result.total_change != 0 or result.components:
            changes[stat] = result.total_change
            components[stat] = result.components
    return LifestyleEvaluationResult(changes=changes, components=components)
