"""NPC Core 도메인 패키지"""

from src.core.npc.models import NPC, Gender

__all__ = ["NPC", "Gender"]
