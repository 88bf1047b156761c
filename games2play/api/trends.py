import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from games2play.core.errors import Internal, TrendsError
from games2play.deps import get_trends_fetcher
from games2play.services.chart_service import render_trend_svg
from games2play.services.trends_service import TrendsFetcher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["trends"])


async def read_keyword(request: Request) -> str | None:
    """The `keyword` field of a JSON body; anything unreadable counts as missing."""
    try:
        payload = await request.json()
    except ValueError:
        return None
    keyword = payload.get("keyword") if isinstance(payload, dict) else None
    return keyword if isinstance(keyword, str) else None


def _error_response(e: TrendsError) -> JSONResponse:
    return JSONResponse({"error": e.message}, status_code=e.status_code)


@router.post("/api/trends")
def trends_timeline(
    keyword: str | None = Depends(read_keyword),
    fetcher: TrendsFetcher = Depends(get_trends_fetcher),
):
    """Raw interest-over-time entries for one keyword, 2004 until now."""
    try:
        timeline = fetcher.fetch_timeline(keyword)
    except TrendsError as e:
        return _error_response(e)
    except Exception:
        logger.exception("API error for keyword %r", keyword)
        return _error_response(Internal())
    return {"timelineData": timeline}


@router.get("/api/trends/svg")
def trends_svg(
    keyword: str | None = None,
    fetcher: TrendsFetcher = Depends(get_trends_fetcher),
) -> Response:
    """The keyword's trend line as an 800x400 SVG.

    Errors come back as JSON, so an <img> pointing here shows as broken.
    """
    try:
        series = fetcher.fetch_series(keyword)
        svg = render_trend_svg(series)
    except TrendsError as e:
        return _error_response(e)
    except Exception:
        logger.exception("SVG route error for keyword %r", keyword)
        return _error_response(Internal())
    return Response(
        content=svg,
        media_type="image/svg+xml; charset=utf-8",
        headers={"Cache-Control": "no-store"},
    )
