import random

from fastapi import Depends
from sqlalchemy.orm import Session

from games2play.core.config import Settings, get_settings
from games2play.core.database import get_db
from games2play.services.food_service import EcoScoreLookup
from games2play.services.score_service import ScoreStore, SqlScoreStore
from games2play.services.trends_service import TrendsFetcher


def get_trends_fetcher(settings: Settings = Depends(get_settings)) -> TrendsFetcher:
    return TrendsFetcher.from_settings(settings)


def get_eco_lookup(settings: Settings = Depends(get_settings)) -> EcoScoreLookup:
    return EcoScoreLookup.from_settings(settings)


def get_score_store(db: Session = Depends(get_db)) -> ScoreStore:
    return SqlScoreStore(db)


def get_rng() -> random.Random:
    return random.Random()
