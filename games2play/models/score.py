from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from games2play.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    anonymous_id = Column(String(32), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow)


class HighScore(Base):
    __tablename__ = "high_scores"
    __table_args__ = (UniqueConstraint("anonymous_id", "game", name="uniq_player_game"),)

    id = Column(Integer, primary_key=True, index=True)
    anonymous_id = Column(String(32), index=True, nullable=False)
    game = Column(String(16), nullable=False)
    score = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
