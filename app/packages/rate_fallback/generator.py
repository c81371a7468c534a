"""Synthetic market data used when the backend cannot serve rates.

Values are drawn from an injected ``random.Random`` so a seeded generator
produces the same payloads every time, and every value stays inside the
bounds declared in ``ASSET_BASELINES``.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Mapping, Optional

from .types import (
    TRENDS,
    AssetBaseline,
    HistoryRates,
    Prediction,
    RateSnapshot,
    TodayRate,
)

ASSETS = ("gold22k", "gold24k", "silver", "bitcoin")

# Prices per gram (gold, silver) and per coin (bitcoin), INR
ASSET_BASELINES: Mapping[str, AssetBaseline] = {
    "gold22k": AssetBaseline(base=5850.0, spread=50.0, daily_move=40.0),
    "gold24k": AssetBaseline(base=6380.0, spread=50.0, daily_move=45.0),
    "silver": AssetBaseline(base=76.5, spread=2.0, daily_move=1.5),
    "bitcoin": AssetBaseline(base=5_600_000.0, spread=150_000.0, daily_move=120_000.0),
}

CONFIDENCE_MIN = 70
CONFIDENCE_MAX = 100
MAX_HISTORY_DAYS = 365


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_date(moment: datetime) -> str:
    return moment.date().isoformat()


def format_timestamp(moment: datetime) -> str:
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class RateFallbackGenerator:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        now: Callable[[], datetime] = utc_now,
        baselines: Mapping[str, AssetBaseline] = ASSET_BASELINES,
    ):
        self.rng = rng or random.Random()
        self.now = now
        self.baselines = baselines

    def _reference_value(self, asset: str) -> float:
        baseline = self.baselines[asset]
        offset = self.rng.uniform(-baseline.spread, baseline.spread)
        return round(baseline.base + offset, 2)

    def _moved_value(self, asset: str, reference: float) -> float:
        move = self.baselines[asset].daily_move
        return round(reference + self.rng.uniform(-move, move), 2)

    def _snapshot(self, moment: datetime, values: Mapping[str, float]) -> RateSnapshot:
        return RateSnapshot(
            date=format_date(moment),
            timestamp=format_timestamp(moment),
            **values,
        )

    def today(self) -> TodayRate:
        """Today's rates with change fields relative to a synthesized yesterday.

        ``change`` is today minus yesterday, so a positive change is a price
        increase; ``changePercent`` is that change relative to yesterday.
        """
        now = self.now()
        yesterday = {asset: self._reference_value(asset) for asset in ASSETS}
        today = {asset: self._moved_value(asset, yesterday[asset]) for asset in ASSETS}
        change = {asset: round(today[asset] - yesterday[asset], 2) for asset in ASSETS}
        percent = {
            asset: round((today[asset] - yesterday[asset]) / yesterday[asset] * 100, 4)
            for asset in ASSETS
        }

        return TodayRate(
            date=format_date(now),
            timestamp=format_timestamp(now),
            **today,
            change22k=change["gold22k"],
            change24k=change["gold24k"],
            change_percent22k=percent["gold22k"],
            change_percent24k=percent["gold24k"],
            silver_change=change["silver"],
            silver_change_percent=percent["silver"],
            bitcoin_change=change["bitcoin"],
            bitcoin_change_percent=percent["bitcoin"],
            yesterday=self._snapshot(now - timedelta(days=1), yesterday),
        )

    def history(self, days: int) -> HistoryRates:
        """One snapshot per day ending today, oldest first.

        ``days`` is clamped to [1, MAX_HISTORY_DAYS].
        """
        days = min(max(days, 1), MAX_HISTORY_DAYS)
        now = self.now()

        rates = [
            self._snapshot(
                now - timedelta(days=offset),
                {asset: self._reference_value(asset) for asset in ASSETS},
            )
            for offset in range(days)
        ]
        rates.reverse()
        return HistoryRates(rates=rates)

    def prediction(self) -> Prediction:
        tomorrow = self.now() + timedelta(days=1)
        return Prediction(
            date=format_date(tomorrow),
            predicted22k=self._reference_value("gold22k"),
            predicted24k=self._reference_value("gold24k"),
            predicted_silver=self._reference_value("silver"),
            predicted_bitcoin=self._reference_value("bitcoin"),
            confidence=self.rng.randint(CONFIDENCE_MIN, CONFIDENCE_MAX),
            trend=self.rng.choice(TRENDS),
        )
