from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from freightview.schemas.quote import QuoteResponse
from freightview.schemas.shipment import ShipmentRequestResponse


class AnalysisFactors(BaseModel):
    timeline_flexibility: Literal["low", "medium", "high"]
    daily_carrying_cost: int | None
    available_days: int | None
    savings_percentage: int | None


class ChartPointResponse(BaseModel):
    forwarder_label: str
    transit_days: int | None
    cost: float
    eta: str | None


class ChartData(BaseModel):
    air: list[ChartPointResponse]
    sea: list[ChartPointResponse]


class AnalysisMeta(BaseModel):
    generated_at: datetime
    quotes_analyzed: int
    is_reliable: bool


class QuoteAnalysisResponse(BaseModel):
    best_air: QuoteResponse | None
    best_sea: QuoteResponse | None
    potential_savings: float | None
    recommendation: Literal["air", "sea"] | None
    recommendation_reason: str | None
    factors: AnalysisFactors
    chart_data: ChartData
    analysis: AnalysisMeta
    request: ShipmentRequestResponse
    air_quotes: list[QuoteResponse]
    sea_quotes: list[QuoteResponse]
