"""활동 Core 패키지 — 공개 API"""

from src.core.activity.models import (
    Activity,
    ActivityCategory,
    ActivityEffectProfile,
    ActivityTag,
    NegativeEffects,
)
from src.core.activity.catalog import (
    ActivityCatalog,
    can_meet_npcs_at,
    is_social_activity,
    is_work_activity,
)

__all__ = [
    "Activity",
    "ActivityCategory",
    "ActivityEffectProfile",
    "ActivityTag",
    "NegativeEffects",
    "ActivityCatalog",
    "can_meet_npcs_at",
    "is_social_activity",
    "is_work_activity",
]
