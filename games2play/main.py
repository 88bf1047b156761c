import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from games2play.api import games, health, trends
from games2play.core.config import get_settings
from games2play.core.database import Base, engine

from games2play.models import score as _score_model  # noqa: F401


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="games2play API")

    # Routers
    app.include_router(health.router)
    app.include_router(trends.router)
    app.include_router(games.router)

    # DB init
    @app.on_event("startup")
    def _startup_create_tables() -> None:
        Base.metadata.create_all(bind=engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
