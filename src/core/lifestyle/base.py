"""패턴 평가기 기반 클래스"""

from abc import ABC, abstractmethod
from typing import Optional

from src.core.lifestyle.snapshot import PlayerPatternSnapshot
from src.core.stats.models import StatChangeComponent, StatName


class PatternEvaluator(ABC):
    """스냅샷 → 스탯 current 변동량 1개.

    evaluate()가 0이 아닌 값을 내면 get_component()로 내역을 만든다.
    """

    id: str = ""
    stat: StatName
    name: str = ""
    category: str = ""

    @abstractmethod
    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        ...

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return self.name

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return None

    def get_component(self, snapshot: PlayerPatternSnapshot, value: float) -> StatChangeComponent:
        return StatChangeComponent(
            source=self.id,
            category=self.category,
            description=self.describe(snapshot),
            value=value,
            details=self.details(snapshot),
        )
