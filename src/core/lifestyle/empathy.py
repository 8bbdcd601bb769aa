"""공감(empathy) 생활 패턴 평가기

친구 관계를 가꾸는지, 대화에 시간을 쓰는지.
"""

from typing import Optional

from src.core.activity.models import ActivityCategory
from src.core.lifestyle.base import PatternEvaluator
from src.core.lifestyle.snapshot import NEGLECT_DAYS, PlayerPatternSnapshot
from src.core.stats.models import StatName

EMPATHY_CATEGORY = "Lifestyle (Empathy)"

MEANINGFUL_MINUTES = 60
SMALL_CIRCLE = 2
LARGE_CIRCLE = 4
DIVERSITY_THRESHOLD = 5
HURT_STATS = (StatName.EMPATHY, StatName.CONFIDENCE)


class EmpathyEvaluator(PatternEvaluator):
    stat = StatName.EMPATHY
    category = EMPATHY_CATEGORY


class MeaningfulConversationEvaluator(EmpathyEvaluator):
    id = "empathy_meaningful_conversation"
    name = "Meaningful Conversation"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        social = snapshot.today.by_category(ActivityCategory.SOCIAL)
        return 1.5 if any(r.time_cost >= MEANINGFUL_MINUTES for r in social) else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Had meaningful conversation"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"Social activity >= {MEANINGFUL_MINUTES} minutes"


class FriendInteractionEvaluator(EmpathyEvaluator):
    id = "empathy_friend_interaction"
    name = "Friend Interaction"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        contacted = snapshot.social.npcs_contacted_today
        return 2.5 if any(f.npc_id in contacted for f in snapshot.social.friends) else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Spent time with friend"


class FriendCircleEvaluator(EmpathyEvaluator):
    id = "empathy_friend_circle"
    name = "Friend Circle"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        count = len(snapshot.social.friends)
        if count >= LARGE_CIRCLE:
            return 1.0 + 1.5
        if count >= SMALL_CIRCLE:
            return 1.0
        return 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        if len(snapshot.social.friends) >= LARGE_CIRCLE:
            return "Have large friend circle"
        return "Have multiple friends"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"{len(snapshot.social.friends)} friends"


class SocialDiversityEvaluator(EmpathyEvaluator):
    id = "empathy_social_diversity"
    name = "Social Diversity"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 1.0 if snapshot.social.unique_npcs_last_7_days >= DIVERSITY_THRESHOLD else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Diverse social interactions"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return (
            f"Interacted with {snapshot.social.unique_npcs_last_7_days} "
            f"different NPCs this week"
        )


class MaintainedFriendshipsEvaluator(EmpathyEvaluator):
    id = "empathy_maintained_friendships"
    name = "Maintained Friendships"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        friends = snapshot.social.friends
        if not friends:
            return 0
        maintained = all(
            f.days_since_contact is not None and f.days_since_contact < NEGLECT_DAYS
            for f in friends
        )
        return 1.0 if maintained else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Maintained all friendships"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"Contacted all {len(snapshot.social.friends)} friends this week"


class ShallowRomanceEvaluator(EmpathyEvaluator):
    """오늘 만난 사람이 전부 crush / lover뿐이면 페널티"""

    id = "empathy_shallow_romance"
    name = "Shallow Romance Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        contacted = snapshot.social.npcs_contacted_today
        romantic = {r.npc_id for r in snapshot.social.romantic_only}
        if not contacted or not romantic:
            return 0
        return -2.0 if contacted <= romantic else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Only interacted with crushes/lovers"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "No meaningful friend interactions today"


class NeglectedFriendsEvaluator(EmpathyEvaluator):
    id = "empathy_neglected_friends"
    name = "Neglected Friends Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        count = len(snapshot.social.neglected_friends)
        return -1.5 * count if count else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Neglected friends"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        count = len(snapshot.social.neglected_friends)
        noun = "friend" if count == 1 else "friends"
        return f"{count} {noun} not contacted in {NEGLECT_DAYS}+ days"


class NegativeInteractionEvaluator(EmpathyEvaluator):
    id = "empathy_negative_interaction"
    name = "Negative Interaction Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        social = snapshot.today.by_category(ActivityCategory.SOCIAL)
        hurt = any(
            r.stat_effects.get(stat, 0) < 0 for r in social for stat in HURT_STATS
        )
        return -2.5 if hurt else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Was dismissive or rude"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Had negative social interaction"


EMPATHY_EVALUATORS = [
    MeaningfulConversationEvaluator(),
    FriendInteractionEvaluator(),
    FriendCircleEvaluator(),
    SocialDiversityEvaluator(),
    MaintainedFriendshipsEvaluator(),
    ShallowRomanceEvaluator(),
    NeglectedFriendsEvaluator(),
    NegativeInteractionEvaluator(),
]
