"""활동 카탈로그 — JSON 로드 + 동적 등록

잘못된 항목은 활동 id를 담은 ValueError로 즉시 실패한다.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Union

from src.core.activity.models import Activity, ActivityCategory
from src.core.logging import get_logger

logger = get_logger(__name__)


class ActivityCatalog:
    """
    활동 정의 저장소.
    초기 데이터(activities.json) + 코드에서 등록한 활동 관리.
    """

    def __init__(self) -> None:
        self._activities: Dict[str, Activity] = {}

    def load_from_json(self, path: Union[str, Path]) -> int:
        """activities.json 로드. 반환: 로드된 수량."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw_list: List[dict] = json.load(f)

        count = 0
        for raw in raw_list:
            activity_id = raw.get("id", "?")
            try:
                activity = Activity.from_dict(raw)
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid activity definition '{activity_id}': {e}") from e
            self.register(activity)
            count += 1

        logger.info("Loaded %d activities from %s", count, path)
        return count

    def register(self, activity: Activity) -> None:
        """중복 id는 ValueError."""
        if activity.id in self._activities:
            raise ValueError(f"Duplicate activity id: {activity.id}")
        self._activities[activity.id] = activity

    def get(self, activity_id: str) -> Optional[Activity]:
        """O(1) 조회. 없으면 None."""
        return self._activities.get(activity_id)

    def get_all(self) -> List[Activity]:
        return list(self._activities.values())

    def by_category(self, category: Union[ActivityCategory, str]) -> List[Activity]:
        category = ActivityCategory(category)
        return [a for a in self._activities.values() if a.category == category]

    def count(self) -> int:
        return len(self._activities)


def is_social_activity(activity: Activity) -> bool:
    """NPC가 필요한 활동"""
    return activity.category == ActivityCategory.SOCIAL


def is_work_activity(activity: Activity) -> bool:
    """worked_today / 연속 근무 집계 대상"""
    return activity.category == ActivityCategory.WORK


def can_meet_npcs_at(location_id: str, home_location: str) -> bool:
    """집에서는 NPC를 만날 수 없다."""
    return location_id != home_location
