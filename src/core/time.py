"""게임 내 시계 계산

"HH:MM" 문자열 기반. 24시간 경계에서 순환.
수면 시각 → 기상 시각 / 수면 시간 / 에너지 회복 테이블.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

MINUTES_PER_DAY = 24 * 60

MAX_SLEEP_ENERGY = 80
ENERGY_PER_HOUR = 10
FULL_NIGHT_HOURS = 8.0
MIN_HOURS_SLEPT = 2.0

EARLY_WAKE_TIME = "06:00"
LATE_WAKE_TIME = "08:00"


class TimeSlot(str, Enum):
    MORNING = "morning"  # 06-12
    AFTERNOON = "afternoon"  # 12-18
    EVENING = "evening"  # 18-24
    NIGHT = "night"  # 00-06


@dataclass(frozen=True)
class SleepResult:
    wake_time: str
    hours_slept: float
    energy_restored: int


def parse_time(time: str) -> Tuple[int, int]:
    """'HH:MM' → (hour, minute). 형식 오류는 ValueError."""
    parts = time.split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {time!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValueError(f"Invalid time value: {time!r}")
    return hour, minute


def to_minutes(time: str) -> int:
    hour, minute = parse_time(time)
    return hour * 60 + minute


def format_time(total_minutes: int) -> str:
    total_minutes %= MINUTES_PER_DAY
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def add_minutes(time: str, minutes: int) -> str:
    """시각에 분을 더한다. 자정을 넘으면 순환."""
    return format_time(to_minutes(time) + minutes)


def get_time_slot(time: str) -> TimeSlot:
    hour, _ = parse_time(time)
    if 6 <= hour < 12:
        return TimeSlot.MORNING
    if 12 <= hour < 18:
        return TimeSlot.AFTERNOON
    if 18 <= hour < 24:
        return TimeSlot.EVENING
    return TimeSlot.NIGHT


def check_activity_end_time(current_time: str, duration_minutes: int) -> Tuple[bool, bool]:
    """활동 종료 시각 검사 → (after_4am, after_midnight).

    after_4am: 04:00~05:59 종료 (금지)
    after_midnight: 자정을 넘겨 04시 이전 종료 (경고)
    """
    end_time = add_minutes(current_time, duration_minutes)
    current_hour, _ = parse_time(current_time)
    end_hour, _ = parse_time(end_time)

    crossed_midnight = end_hour < current_hour
    ends_in_forbidden = 4 <= end_hour < 6

    after_4am = (crossed_midnight and ends_in_forbidden) or (
        not crossed_midnight and current_hour < 6 and ends_in_forbidden
    )
    after_midnight = crossed_midnight and end_hour < 4
    return after_4am, after_midnight


def calculate_energy_restored(hours_slept: float) -> int:
    return min(MAX_SLEEP_ENERGY, math.floor(hours_slept * ENERGY_PER_HOUR))


def calculate_sleep_results(bedtime: str) -> SleepResult:
    """취침 시각별 기상 시각 / 수면 시간.

    06:00~21:59 → 06:00 기상, 8시간 인정
    22:00~23:59 → 정확히 8시간 후 기상
    00:00~05:59 → 08:00 기상, 늦을수록 감소 (최소 MIN_HOURS_SLEPT)
    """
    bed_hour, _ = parse_time(bedtime)
    bed_minutes = to_minutes(bedtime)

    if 6 <= bed_hour < 22:
        wake_time = EARLY_WAKE_TIME
        hours_slept = FULL_NIGHT_HOURS
    elif bed_hour >= 22:
        hours_slept = FULL_NIGHT_HOURS
        wake_time = format_time(bed_minutes + int(FULL_NIGHT_HOURS * 60))
    else:
        wake_time = LATE_WAKE_TIME
        hours_slept = max(MIN_HOURS_SLEPT, (to_minutes(LATE_WAKE_TIME) - bed_minutes) / 60)

    return SleepResult(
        wake_time=wake_time,
        hours_slept=hours_slept,
        energy_restored=calculate_energy_restored(hours_slept),
    )
