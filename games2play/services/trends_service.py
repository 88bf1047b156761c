from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

from games2play.core.config import Settings
from games2play.core.errors import (
    InsufficientData,
    MissingInput,
    TrendsError,
    UpstreamMalformed,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)

# Google prefixes every JSON body with this to defeat JSON hijacking.
_XSSI_PREFIX = ")]}'"

_HTML_MESSAGE = "Google returned HTML instead of JSON (possibly blocked or captcha)"


@dataclass(frozen=True)
class TimeSeriesPoint:
    time: str | None
    values: tuple[float, ...]

    @property
    def value(self) -> float:
        return self.values[0] if self.values else 0.0


def _strip_xssi(text: str) -> str:
    s = text.lstrip()
    if s.startswith(_XSSI_PREFIX):
        s = s[len(_XSSI_PREFIX):].lstrip(",").lstrip()
    return s


def _looks_like_markup(text: str) -> bool:
    return text.lstrip().startswith("<")


def _is_number(v) -> bool:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return math.isfinite(v)


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} in response")


def _finite_float(text: str) -> float:
    v = float(text)
    if not math.isfinite(v):
        raise ValueError(f"number {text} out of range")
    return v


def parse_timeline(body: str) -> list[dict]:
    """Validate a raw interest-over-time body and return its timeline entries.

    The body is untrusted: it can be a block page, a truncated response or a
    payload whose shape drifted. Every one of those ends in UpstreamMalformed.
    An absent ``timelineData`` means the provider has nothing for the
    keyword and yields an empty list.
    """
    if not isinstance(body, str):
        logger.error("Google Trends response was %s, expected text", type(body).__name__)
        raise UpstreamMalformed()

    if _looks_like_markup(body):
        logger.error("Google Trends response was HTML (likely blocked or captcha).")
        raise UpstreamMalformed(_HTML_MESSAGE)

    try:
        payload = json.loads(
            _strip_xssi(body),
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except ValueError as e:
        logger.error("Failed to parse Google Trends response: %s", e)
        logger.error("Response snippet: %s", body[:200])
        raise UpstreamMalformed() from e

    default = payload.get("default") if isinstance(payload, dict) else None
    if not isinstance(default, dict):
        logger.error("Google Trends response has no 'default' object: %s", body[:200])
        raise UpstreamMalformed()

    timeline = default.get("timelineData")
    if timeline is None:
        return []
    if not isinstance(timeline, list):
        logger.error("Google Trends timelineData is %s, expected list", type(timeline).__name__)
        raise UpstreamMalformed()

    for i, entry in enumerate(timeline):
        if not isinstance(entry, dict):
            logger.error("Google Trends timeline entry %d is not an object", i)
            raise UpstreamMalformed()
        value = entry.get("value")
        if value is None:
            continue
        if not isinstance(value, list) or not all(_is_number(v) for v in value):
            logger.error("Google Trends timeline entry %d has bad value: %r", i, value)
            raise UpstreamMalformed()
    return timeline


def to_series(timeline: list[dict]) -> list[TimeSeriesPoint]:
    points: list[TimeSeriesPoint] = []
    for entry in timeline:
        t = entry.get("time")
        points.append(
            TimeSeriesPoint(
                time=str(t) if t is not None else None,
                values=tuple(float(v) for v in entry.get("value") or ()),
            )
        )
    return points


class GoogleTrendsProvider:
    """Interest-over-time lookups against the Google Trends web API.

    A lookup is two requests: ``explore`` hands out a token for the
    TIMESERIES widget, ``widgetdata/multiline`` returns the series. The
    timeout is a deadline for the pair, not for each request.
    """

    def __init__(
        self,
        base_url: str = "https://trends.google.com",
        hl: str = "en-US",
        tz: int = 0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.hl = hl
        self.tz = tz
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GoogleTrendsProvider":
        return cls(base_url=settings.trends_base_url, hl=settings.trends_hl, tz=settings.trends_tz)

    def interest_over_time(
        self,
        keyword: str,
        start_time: datetime,
        end_time: datetime | None = None,
        geo: str = "",
        timeout: float | None = None,
    ) -> str:
        deadline = time.monotonic() + timeout if timeout else None
        end_time = end_time or datetime.now(timezone.utc)
        explore_req = {
            "comparisonItem": [
                {
                    "keyword": keyword,
                    "geo": geo,
                    "time": f"{start_time:%Y-%m-%d} {end_time:%Y-%m-%d}",
                }
            ],
            "category": 0,
            "property": "",
        }

        with httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            transport=self._transport,
            headers={"User-Agent": "games2play/1.0"},
        ) as client:
            r = client.get(
                f"{self.base_url}/trends/api/explore",
                params={"hl": self.hl, "tz": self.tz, "req": json.dumps(explore_req)},
            )
            r.raise_for_status()
            widget = self._timeseries_widget(r.text)

            r = client.get(
                f"{self.base_url}/trends/api/widgetdata/multiline",
                params={
                    "hl": self.hl,
                    "tz": self.tz,
                    "req": json.dumps(widget["request"]),
                    "token": widget["token"],
                },
                timeout=self._remaining(deadline),
            )
            r.raise_for_status()
            return _strip_xssi(r.text)

    @staticmethod
    def _remaining(deadline: float | None) -> float | None:
        if deadline is None:
            return None
        left = deadline - time.monotonic()
        if left <= 0:
            raise UpstreamUnavailable("Google Trends API did not respond in time")
        return left

    @staticmethod
    def _timeseries_widget(body: str) -> dict:
        if _looks_like_markup(body):
            logger.error("Google Trends explore response was HTML (likely blocked or captcha).")
            raise UpstreamMalformed(_HTML_MESSAGE)
        try:
            data = json.loads(_strip_xssi(body))
        except ValueError as e:
            logger.error("Failed to parse Google Trends explore response: %s", e)
            raise UpstreamMalformed() from e
        widgets = data.get("widgets") if isinstance(data, dict) else None
        for w in widgets or []:
            if isinstance(w, dict) and w.get("id") == "TIMESERIES" and "token" in w and "request" in w:
                return w
        logger.error("Google Trends explore response has no TIMESERIES widget")
        raise UpstreamMalformed()


class TrendsFetcher:
    """Fetch one keyword's interest-over-time series from a trends provider.

    ``provider`` is anything with an ``interest_over_time`` method returning
    the raw text body. One provider call per fetch, no retries.
    """

    def __init__(
        self,
        provider,
        start_time: datetime = datetime(2004, 1, 1),
        geo: str = "",
        timeout: float | None = None,
    ):
        self.provider = provider
        self.start_time = start_time
        self.geo = geo
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings, provider=None) -> "TrendsFetcher":
        return cls(
            provider or GoogleTrendsProvider.from_settings(settings),
            start_time=settings.trends_start_time,
            geo=settings.trends_geo,
            timeout=settings.trends_timeout,
        )

    def fetch_timeline(
        self,
        keyword: str | None,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        geo: str | None = None,
        timeout: float | None = None,
    ) -> list[dict]:
        keyword = keyword.strip() if isinstance(keyword, str) else ""
        if not keyword:
            raise MissingInput()

        try:
            body = self.provider.interest_over_time(
                keyword,
                start_time=start_time or self.start_time,
                end_time=end_time,
                geo=self.geo if geo is None else geo,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except TrendsError:
            raise
        except httpx.TimeoutException as e:
            logger.error("Google Trends request timed out for %r: %s", keyword, e)
            raise UpstreamUnavailable("Google Trends API did not respond in time") from e
        except Exception as e:
            logger.error("Failed to fetch Google Trends data for %r: %r", keyword, e)
            raise UpstreamUnavailable() from e

        return parse_timeline(body)

    def fetch_series(self, keyword: str | None, **kwargs) -> list[TimeSeriesPoint]:
        series = to_series(self.fetch_timeline(keyword, **kwargs))
        if len(series) < 2:
            raise InsufficientData()
        return series
