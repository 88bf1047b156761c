import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from games2play.services.food_service import Product, ProductInfo
from games2play.services.game_service import (
    FoodRound,
    TrendsRound,
    finish_game,
    is_correct_guess,
    new_food_round,
    new_trends_round,
    pick_two_distinct,
    share_text,
)
from games2play.services.score_service import MemoryScoreStore
from games2play.services.words_service import load_words, parse_words


class FixedLookup:
    def __init__(self, scores: dict[str, int]):
        self.scores = scores
        self.user_ids = []

    def product_info(self, product: Product, user_id=None) -> ProductInfo:
        self.user_ids.append(user_id)
        return ProductInfo(
            barcode=product.barcode,
            name=product.name,
            image_url=product.image_url,
            eco_score=self.scores[product.barcode],
        )


def info(barcode: str, score: int) -> ProductInfo:
    return ProductInfo(barcode=barcode, name=barcode, image_url="", eco_score=score)


class TestPickTwoDistinct:
    @given(
        items=st.lists(st.text(min_size=1), min_size=2, max_size=30, unique=True),
        seed=st.integers(min_value=0, max_value=2**32),
    )
    @settings(max_examples=100, deadline=None)
    def test_distinct_members(self, items, seed):
        a, b = pick_two_distinct(items, random.Random(seed))

        assert a != b
        assert a in items and b in items

    @pytest.mark.parametrize("items", [[], ["only"]])
    def test_needs_two_items(self, items):
        with pytest.raises(ValueError):
            pick_two_distinct(items, random.Random(0))


class TestTrendsRound:
    def test_options_hold_the_answer(self):
        r = new_trends_round(["zoom", "wordle", "tiktok"], random.Random(3))

        assert r.keyword in r.options
        assert len(set(r.options)) == 2

    def test_chart_url_is_quoted(self):
        r = TrendsRound(keyword="taylor swift", options=["taylor swift", "zoom"])

        assert r.chart_url == "/api/trends/svg?keyword=taylor%20swift"

    def test_guess(self):
        r = TrendsRound(keyword="zoom", options=["wordle", "zoom"])

        assert is_correct_guess(r, "zoom")
        assert not is_correct_guess(r, "wordle")


class TestFoodRound:
    def test_healthier_has_higher_score(self):
        assert FoodRound(options=[info("a", 70), info("b", 20)]).healthier == "a"
        assert FoodRound(options=[info("a", 20), info("b", 70)]).healthier == "b"

    def test_tie_goes_to_second(self):
        assert FoodRound(options=[info("a", 50), info("b", 50)]).healthier == "b"

    def test_new_round_looks_up_both(self):
        products = [Product(barcode=str(i), name=f"p{i}") for i in range(4)]
        lookup = FixedLookup({"0": 10, "1": 20, "2": 30, "3": 40})

        r = new_food_round(products, lookup, random.Random(1), user_id="user-7")

        a, b = r.options
        assert a.barcode != b.barcode
        assert lookup.user_ids == ["user-7", "user-7"]
        assert is_correct_guess(r, r.healthier)


class TestFinishGame:
    def test_new_record(self):
        store = MemoryScoreStore()
        pid = store.new_anonymous_id()

        assert finish_game(store, pid, "trends", 4) == (4, True)
        assert finish_game(store, pid, "trends", 2) == (4, False)
        assert finish_game(store, pid, "trends", 4) == (4, False)
        assert store.get_high_score(pid, "trends") == 4
        assert store.get_high_score(pid, "food") == 0

    def test_share_text(self):
        assert share_text("trends", 3) == "I scored 3 points in the Google Trends Guessing Game! Can you beat me?"
        assert share_text("food", 0) == "I scored 0 points in the Food Guessing Game! Can you beat me?"


class TestWords:
    def test_parse_words(self):
        assert parse_words("  zoom \r\n\r\nwordle\n\n  \ntiktok") == ["zoom", "wordle", "tiktok"]

    def test_load_words(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("bitcoin\nolympics\n", encoding="utf-8")

        assert load_words(path) == ["bitcoin", "olympics"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_words(tmp_path / "nope.txt")
