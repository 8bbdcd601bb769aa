"""SQLAlchemy declarative base for all ORM models."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class PlayerCharacterModel(Base):
    """ORM model for player characters.

    stats / tracking are stored as JSON (StatVector.to_dict / StatTracking.to_dict).
    """

    __tablename__ = "player_characters"

    player_id: Mapped[str] = mapped_column(String, primary_key=True)
    archetype: Mapped[str] = mapped_column(String, nullable=False)
    sexual_preference: Mapped[str] = mapped_column(String, nullable=False, default="everyone")

    current_energy: Mapped[int] = mapped_column(Integer, nullable=False)
    max_energy: Mapped[int] = mapped_column(Integer, nullable=False)
    money: Mapped[int] = mapped_column(Integer, nullable=False)

    current_day: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    current_time: Mapped[str] = mapped_column(String, nullable=False)
    last_slept_at: Mapped[str | None] = mapped_column(String, nullable=True)
    current_location: Mapped[str] = mapped_column(String, nullable=False)

    stats: Mapped[dict] = mapped_column(JSON, nullable=False)
    tracking: Mapped[dict] = mapped_column(JSON, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)


class NPCModel(Base):
    """ORM model for NPCs."""

    __tablename__ = "npcs"

    npc_id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    gender: Mapped[str] = mapped_column(String, nullable=False)
    traits: Mapped[list] = mapped_column(JSON, default=list)
    revealed_traits: Mapped[list] = mapped_column(JSON, default=list)
    current_location: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class RelationshipModel(Base):
    """ORM model for player-NPC relationships (one row per pair)."""

    __tablename__ = "relationships"

    relationship_id: Mapped[str] = mapped_column(String, primary_key=True)
    player_id: Mapped[str] = mapped_column(
        String, ForeignKey("player_characters.player_id", ondelete="CASCADE"), nullable=False
    )
    npc_id: Mapped[str] = mapped_column(
        String, ForeignKey("npcs.npc_id", ondelete="CASCADE"), nullable=False
    )

    trust: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    affection: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    desire: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    desire_cap: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # 캐시. 판정은 항상 축 값에서 다시 계산한다.
    current_state: Mapped[str] = mapped_column(String, nullable=False, default="stranger")
    unlocked_states: Mapped[list] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (UniqueConstraint("player_id", "npc_id", name="uq_player_npc"),)


class PlayerActivityModel(Base):
    """ORM model for the activity log (one row per performed activity)."""

    __tablename__ = "player_activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(
        String, ForeignKey("player_characters.player_id", ondelete="CASCADE"), nullable=False
    )
    activity_id: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    npc_id: Mapped[str | None] = mapped_column(String, nullable=True)

    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    time_of_day: Mapped[str] = mapped_column(String, nullable=False)

    time_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    difficulty: Mapped[int | None] = mapped_column(Integer, nullable=True)
    relevant_stats: Mapped[list] = mapped_column(JSON, default=list)
    outcome_tier: Mapped[str | None] = mapped_column(String, nullable=True)
    roll: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stat_bonus: Mapped[int | None] = mapped_column(Integer, nullable=True)
    dc: Mapped[int | None] = mapped_column(Integer, nullable=True)

    stat_effects: Mapped[dict] = mapped_column(JSON, default=dict)
    relationship_effects: Mapped[dict] = mapped_column(JSON, default=dict)
    energy_delta: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    money_delta: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
