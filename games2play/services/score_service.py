from __future__ import annotations

import random

from sqlalchemy import select
from sqlalchemy.orm import Session

from games2play.models import HighScore, Player


def make_anonymous_id(rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    return f"user-{rng.randrange(1_000_000)}"


class ScoreStore:
    """Persisted player state: anonymous ids and per-game high scores."""

    def new_anonymous_id(self) -> str:
        raise NotImplementedError

    def has_player(self, player_id: str) -> bool:
        raise NotImplementedError

    def get_high_score(self, player_id: str, game: str) -> int:
        raise NotImplementedError

    def set_high_score(self, player_id: str, game: str, score: int) -> None:
        raise NotImplementedError


class MemoryScoreStore(ScoreStore):
    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self._players: set[str] = set()
        self._scores: dict[tuple[str, str], int] = {}

    def new_anonymous_id(self) -> str:
        pid = make_anonymous_id(self._rng)
        while pid in self._players:
            pid = make_anonymous_id(self._rng)
        self._players.add(pid)
        return pid

    def has_player(self, player_id: str) -> bool:
        return player_id in self._players

    def get_high_score(self, player_id: str, game: str) -> int:
        return self._scores.get((player_id, game), 0)

    def set_high_score(self, player_id: str, game: str, score: int) -> None:
        self._scores[(player_id, game)] = int(score)


class SqlScoreStore(ScoreStore):
    def __init__(self, db: Session, rng: random.Random | None = None):
        self.db = db
        self._rng = rng or random.Random()

    def new_anonymous_id(self) -> str:
        pid = make_anonymous_id(self._rng)
        while self.has_player(pid):
            pid = make_anonymous_id(self._rng)
        self.db.add(Player(anonymous_id=pid))
        self.db.commit()
        return pid

    def has_player(self, player_id: str) -> bool:
        row = self.db.execute(
            select(Player.id).where(Player.anonymous_id == player_id)
        ).scalar_one_or_none()
        return row is not None

    def get_high_score(self, player_id: str, game: str) -> int:
        score = self.db.execute(
            select(HighScore.score).where(HighScore.anonymous_id == player_id, HighScore.game == game)
        ).scalar_one_or_none()
        return int(score or 0)

    def set_high_score(self, player_id: str, game: str, score: int) -> None:
        row = self.db.execute(
            select(HighScore).where(HighScore.anonymous_id == player_id, HighScore.game == game)
        ).scalar_one_or_none()
        if row is None:
            self.db.add(HighScore(anonymous_id=player_id, game=game, score=int(score)))
        else:
            row.score = int(score)
        self.db.commit()
