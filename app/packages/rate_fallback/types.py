"""Market data payloads served by the rate endpoints.

Synthetic payloads are built from these models so they always carry the same
keys and types as genuine backend responses. Field names follow the wire
format used by the UI (dumped with ``by_alias=True``).
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

Trend = Literal["up", "down", "stable"]
TRENDS: tuple[Trend, ...] = ("up", "down", "stable")


@dataclass(frozen=True)
class AssetBaseline:
    """Bounds used when synthesizing values for one asset.

    Attributes:
        base: Reference price
        spread: Synthesized reference values stay in [base - spread, base + spread]
        daily_move: Largest day-over-day move applied on top of a reference value
    """

    base: float
    spread: float
    daily_move: float

    @property
    def minimum(self) -> float:
        return self.base - self.spread - self.daily_move

    @property
    def maximum(self) -> float:
        return self.base + self.spread + self.daily_move


class RateSnapshot(BaseModel):
    date: str
    gold22k: float
    gold24k: float
    silver: float
    bitcoin: float
    timestamp: str


class TodayRate(RateSnapshot):
    change22k: float
    change24k: float
    change_percent22k: float = Field(serialization_alias="changePercent22k")
    change_percent24k: float = Field(serialization_alias="changePercent24k")
    silver_change: float = Field(serialization_alias="silverChange")
    silver_change_percent: float = Field(serialization_alias="silverChangePercent")
    bitcoin_change: float = Field(serialization_alias="bitcoinChange")
    bitcoin_change_percent: float = Field(serialization_alias="bitcoinChangePercent")
    yesterday: RateSnapshot


class HistoryRates(BaseModel):
    rates: list[RateSnapshot]


class Prediction(BaseModel):
    date: str
    predicted22k: float
    predicted24k: float
    predicted_silver: float = Field(serialization_alias="predictedSilver")
    predicted_bitcoin: float = Field(serialization_alias="predictedBitcoin")
    confidence: int
    trend: Trend
