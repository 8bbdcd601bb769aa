"""플레이어 캐릭터 도메인 모델

DB 무관 순수 데이터 클래스.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from src.core.relationship.models import SexualPreference
from src.core.stats.archetypes import get_default_tracking, get_starting_stats
from src.core.stats.models import PlayerArchetype, StatTracking, StatVector
from src.core.time import parse_time

DEFAULT_MAX_ENERGY = 100
DEFAULT_STARTING_MONEY = 200
DEFAULT_STARTING_TIME = "08:00"
DEFAULT_HOME_LOCATION = "home"


@dataclass
class PlayerCharacter:
    """게임 내 플레이어 상태 (자원 + 시계 + 스탯)"""

    player_id: str
    archetype: PlayerArchetype
    stats: StatVector
    tracking: StatTracking = field(default_factory=get_default_tracking)
    sexual_preference: SexualPreference = SexualPreference.EVERYONE

    # 자원
    current_energy: int = DEFAULT_MAX_ENERGY
    max_energy: int = DEFAULT_MAX_ENERGY
    money: int = DEFAULT_STARTING_MONEY

    # 시계 / 위치
    current_day: int = 1
    current_time: str = DEFAULT_STARTING_TIME
    last_slept_at: Optional[str] = None
    current_location: str = DEFAULT_HOME_LOCATION

    def __post_init__(self) -> None:
        self.archetype = PlayerArchetype(self.archetype)
        self.sexual_preference = SexualPreference(self.sexual_preference)
        parse_time(self.current_time)
        if not 0 <= self.current_energy <= self.max_energy:
            raise ValueError(
                f"current_energy out of range [0, {self.max_energy}]: {self.current_energy}"
            )


def create_player_character(
    player_id: str,
    archetype: Union[PlayerArchetype, str] = PlayerArchetype.BALANCED,
    sexual_preference: Union[SexualPreference, str] = SexualPreference.EVERYONE,
    money: int = DEFAULT_STARTING_MONEY,
    max_energy: int = DEFAULT_MAX_ENERGY,
    starting_time: str = DEFAULT_STARTING_TIME,
    home_location: str = DEFAULT_HOME_LOCATION,
) -> PlayerCharacter:
    """아키타입 템플릿으로 새 캐릭터 생성 (1일차, 에너지 가득)."""
    archetype = PlayerArchetype(archetype)
    return PlayerCharacter(
        player_id=player_id,
        archetype=archetype,
        stats=get_starting_stats(archetype),
        tracking=get_default_tracking(),
        sexual_preference=sexual_preference,
        current_energy=max_energy,
        max_energy=max_energy,
        money=money,
        current_day=1,
        current_time=starting_time,
        current_location=home_location,
    )
