from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence, TypeVar
from urllib.parse import quote

from games2play.services.food_service import EcoScoreLookup, Product, ProductInfo
from games2play.services.score_service import ScoreStore

T = TypeVar("T")

GAME_TITLES = {
    "trends": "Google Trends Guessing Game",
    "food": "Food Guessing Game",
}


@dataclass(frozen=True)
class TrendsRound:
    keyword: str
    options: list[str]

    @property
    def chart_url(self) -> str:
        return f"/api/trends/svg?keyword={quote(self.keyword)}"


@dataclass(frozen=True)
class FoodRound:
    options: list[ProductInfo]

    @property
    def healthier(self) -> str:
        # ties go to the second option
        a, b = self.options
        return a.barcode if a.eco_score > b.eco_score else b.barcode


def pick_two_distinct(items: Sequence[T], rng: random.Random) -> tuple[T, T]:
    if len(items) < 2:
        raise ValueError("Need at least two items to play")
    i, j = rng.sample(range(len(items)), 2)
    return items[i], items[j]


def new_trends_round(words: Sequence[str], rng: random.Random) -> TrendsRound:
    correct, wrong = pick_two_distinct(words, rng)
    options = [correct, wrong]
    rng.shuffle(options)
    return TrendsRound(keyword=correct, options=options)


def new_food_round(
    products: Sequence[Product],
    lookup: EcoScoreLookup,
    rng: random.Random,
    user_id: str | None = None,
) -> FoodRound:
    a, b = pick_two_distinct(products, rng)
    return FoodRound(options=[lookup.product_info(a, user_id), lookup.product_info(b, user_id)])


def is_correct_guess(game_round: TrendsRound | FoodRound, choice: str) -> bool:
    if isinstance(game_round, TrendsRound):
        return choice == game_round.keyword
    return choice == game_round.healthier


def share_text(game: str, score: int) -> str:
    return f"I scored {score} points in the {GAME_TITLES[game]}! Can you beat me?"


def finish_game(store: ScoreStore, player_id: str, game: str, score: int) -> tuple[int, bool]:
    """Record a finished game. Returns (high_score, new_record)."""
    best = store.get_high_score(player_id, game)
    if score > best:
        store.set_high_score(player_id, game, score)
        return score, True
    return best, False
