"""이벤트 유형 상수

서비스가 유스케이스 완료 시 발행한다. data에는 식별자와 요약 값만 담는다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # player
    PLAYER_CREATED = "player_created"
    PLAYER_RESET = "player_reset"
    PLAYER_TRAVELED = "player_traveled"

    # activity
    ACTIVITY_RESOLVED = "activity_resolved"

    # relationship
    RELATIONSHIP_CREATED = "relationship_created"
    RELATIONSHIP_CHANGED = "relationship_changed"
    RELATIONSHIP_STATE_CHANGED = "relationship_state_changed"

    # npc
    NPC_CREATED = "npc_created"
    TRAIT_DISCOVERED = "trait_discovered"

    # sleep
    DAY_ADVANCED = "day_advanced"
