"""활동 수행 가능 여부 판정

자원(에너지/돈) → 시간대 → 종료 시각 → 장소 순서로 검사.
첫 번째 실패 사유만 보고한다.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.activity.models import Activity
from src.core.locations import get_location, is_location_open
from src.core.player.models import PlayerCharacter
from src.core.time import check_activity_end_time, get_time_slot


@dataclass(frozen=True)
class ActivityAvailability:
    activity_id: str
    available: bool
    reason: Optional[str] = None
    ends_after_midnight: bool = False


def can_perform_activity(activity: Activity, player: PlayerCharacter) -> ActivityAvailability:
    """플레이어 현재 상태로 활동을 시작할 수 있는지."""

    def blocked(reason: str) -> ActivityAvailability:
        return ActivityAvailability(activity_id=activity.id, available=False, reason=reason)

    if player.current_energy + activity.energy_cost < 0:
        return blocked("Not enough energy")

    if player.money + activity.money_cost < 0:
        return blocked("Not enough money")

    if activity.allowed_time_slots is not None:
        if get_time_slot(player.current_time) not in activity.allowed_time_slots:
            return blocked("Not available at this time")

    after_4am, after_midnight = check_activity_end_time(player.current_time, activity.time_cost)
    if after_4am:
        return blocked("Would end too late (after 4 AM)")

    if activity.location is not None:
        location = get_location(activity.location)
        if player.current_location != location.id:
            return blocked(f"Must be at {location.name}")
        if not is_location_open(location.id, player.current_time):
            return blocked(f"{location.name} is closed")

    return ActivityAvailability(
        activity_id=activity.id, available=True, ends_after_midnight=after_midnight
    )
