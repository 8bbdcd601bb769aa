"""플레이어 Core 도메인 패키지"""

from src.core.player.models import PlayerCharacter, create_player_character

__all__ = ["PlayerCharacter", "create_player_character"]
