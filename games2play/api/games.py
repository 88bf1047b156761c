import logging
import random

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from games2play.core.config import Settings, get_settings
from games2play.deps import get_eco_lookup, get_rng, get_score_store
from games2play.services.food_service import EcoScoreLookup, load_products
from games2play.services.game_service import (
    GAME_TITLES,
    finish_game,
    is_correct_guess,
    new_food_round,
    new_trends_round,
    share_text,
    TrendsRound,
)
from games2play.services.score_service import ScoreStore
from games2play.services.words_service import load_words

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["games"])


class TrendsGuessRequest(BaseModel):
    keyword: str
    choice: str


class ScoreRequest(BaseModel):
    player_id: str = Field(..., min_length=1, max_length=32)
    score: int = Field(..., ge=0)


def _check_game(game: str) -> None:
    if game not in GAME_TITLES:
        raise HTTPException(status_code=404, detail="Game not found")


def _check_player(store: ScoreStore, player_id: str) -> None:
    if not store.has_player(player_id):
        raise HTTPException(status_code=404, detail="Player not found")


@router.get("/games/trends/round")
def trends_round(
    settings: Settings = Depends(get_settings),
    rng: random.Random = Depends(get_rng),
):
    try:
        r = new_trends_round(load_words(settings.words_path), rng)
    except (OSError, ValueError) as e:
        logger.error("Cannot start trends round: %s", e)
        return JSONResponse({"error": "Word list unavailable"}, status_code=500)
    return {"options": r.options, "chart_url": r.chart_url}


@router.post("/games/trends/guess")
def trends_guess(body: TrendsGuessRequest):
    r = TrendsRound(keyword=body.keyword, options=[])
    return {"correct": is_correct_guess(r, body.choice), "keyword": body.keyword}


@router.get("/games/food/round")
def food_round(
    player_id: str | None = None,
    settings: Settings = Depends(get_settings),
    lookup: EcoScoreLookup = Depends(get_eco_lookup),
    rng: random.Random = Depends(get_rng),
):
    try:
        products = load_products(settings.products_path)
        r = new_food_round(products, lookup, rng, user_id=player_id)
    except (OSError, ValueError) as e:
        logger.error("Cannot start food round: %s", e)
        return JSONResponse({"error": "Product list unavailable"}, status_code=500)
    return {"options": [p.model_dump() for p in r.options], "healthier": r.healthier}


@router.post("/players")
def create_player(store: ScoreStore = Depends(get_score_store)):
    return {"player_id": store.new_anonymous_id()}


@router.get("/scores/{game}")
def get_high_score(
    game: str,
    player_id: str,
    store: ScoreStore = Depends(get_score_store),
):
    _check_game(game)
    _check_player(store, player_id)
    return {"game": game, "player_id": player_id, "high_score": store.get_high_score(player_id, game)}


@router.post("/scores/{game}")
def submit_score(
    game: str,
    body: ScoreRequest,
    store: ScoreStore = Depends(get_score_store),
):
    _check_game(game)
    _check_player(store, body.player_id)
    high_score, new_record = finish_game(store, body.player_id, game, body.score)
    return {
        "score": body.score,
        "high_score": high_score,
        "new_record": new_record,
        "share_text": share_text(game, body.score),
    }
