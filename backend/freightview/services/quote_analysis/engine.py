"""Quote analysis engine — air vs sea comparison for a single shipment request.

Pure and synchronous: no I/O, no logging, inputs are never mutated. Calling
``analyze`` twice with the same inputs gives the same result.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, DecimalException
from typing import Iterable

from freightview.services.quote_analysis.config import AnalysisConfig, analysis_config
from freightview.services.quote_analysis.inputs import (
    AIR,
    SEA,
    NormalizedQuote,
    QuoteAnalysisValidationError,
    QuoteInput,
    ShipmentInput,
    to_amount,
    to_days,
    to_moment,
)

DAYS_PER_YEAR = 365
SECONDS_PER_DAY = 24 * 60 * 60

REASON_ONLY_SEA = "Only sea freight quotes available."
REASON_ONLY_AIR = "Only air freight quotes available."
REASON_SEA_MISSES_DEADLINE = "Sea freight does not meet delivery deadline. Air freight required."

OUT_OF_RANGE = "amount too large to compare"


@dataclass(frozen=True)
class ChartPoint:
    """One quote plotted on the cost vs transit chart."""
    forwarder_label: str
    transit_days: int | None
    cost: Decimal
    eta: str | None

    def to_dict(self) -> dict:
        return {
            "forwarder_label": self.forwarder_label,
            "transit_days": self.transit_days,
            "cost": float(self.cost),
            "eta": self.eta,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Structured comparison of the air and sea quotes of one request."""
    best_air: QuoteInput | None
    best_sea: QuoteInput | None
    potential_savings: Decimal | None
    savings_percentage: int | None
    recommendation: str | None          # "air" | "sea" | None
    recommendation_reason: str | None
    timeline_flexibility: str           # "low" | "medium" | "high"
    available_days: int | None
    daily_carrying_cost: int | None
    is_reliable: bool
    quotes_considered: int
    air_quotes: list[QuoteInput] = field(default_factory=list)
    sea_quotes: list[QuoteInput] = field(default_factory=list)
    chart_air: list[ChartPoint] = field(default_factory=list)
    chart_sea: list[ChartPoint] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "best_air": _quote_to_dict(self.best_air),
            "best_sea": _quote_to_dict(self.best_sea),
            "potential_savings": (
                float(self.potential_savings) if self.potential_savings is not None else None
            ),
            "recommendation": self.recommendation,
            "recommendation_reason": self.recommendation_reason,
            "factors": {
                "timeline_flexibility": self.timeline_flexibility,
                "daily_carrying_cost": self.daily_carrying_cost,
                "available_days": self.available_days,
                "savings_percentage": self.savings_percentage,
            },
            "chart_data": {
                "air": [p.to_dict() for p in self.chart_air],
                "sea": [p.to_dict() for p in self.chart_sea],
            },
            "is_reliable": self.is_reliable,
        }


def analyze(
    request: ShipmentInput,
    quotes: Iterable[QuoteInput],
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Compare the air and sea quotes of a shipment request.

    Raises QuoteAnalysisValidationError naming the offending field when a
    date or amount cannot be interpreted. Missing optional data is not an
    error and only produces None-valued fields.
    """
    cfg = config or analysis_config

    ready = to_moment(request.cargo_ready_date, "cargo_ready_date")
    required = to_moment(request.delivery_required_date, "delivery_required_date")
    cargo_value = to_amount(request.value_usd, "value_usd", required=False)

    considered = [q for q in quotes if q.status not in cfg.excluded_statuses]

    air: list[NormalizedQuote] = []
    sea: list[NormalizedQuote] = []
    for index, quote in enumerate(considered):
        if quote.mode not in (AIR, SEA):
            continue
        normalized = _normalize_quote(quote, index, cfg)
        (air if quote.mode == AIR else sea).append(normalized)

    # sorted() is stable: equal amounts keep their input order
    air.sort(key=lambda q: q.total_amount)
    sea.sort(key=lambda q: q.total_amount)

    best_air = air[0] if air else None
    best_sea = sea[0] if sea else None

    potential_savings = None
    savings_percentage = None
    if best_air and best_sea:
        potential_savings = best_air.total_amount - best_sea.total_amount
        if best_air.total_amount != 0:
            try:
                savings_percentage = _round_half_away(
                    potential_savings / best_air.total_amount * 100
                )
            except DecimalException:
                raise QuoteAnalysisValidationError(
                    f"{best_air.field_prefix}.total_amount", OUT_OF_RANGE
                ) from None

    recommendation, reason = _recommend(
        best_air, best_sea, required, savings_percentage, potential_savings, cfg
    )
    flexibility, available_days = _timeline_flexibility(ready, required, cfg)

    daily_carrying_cost = None
    if cargo_value is not None:
        try:
            daily_carrying_cost = _round_half_away(
                cargo_value * Decimal(str(cfg.annual_carrying_cost_rate)) / DAYS_PER_YEAR
            )
        except DecimalException:
            raise QuoteAnalysisValidationError("value_usd", OUT_OF_RANGE) from None

    return AnalysisResult(
        best_air=best_air.source if best_air else None,
        best_sea=best_sea.source if best_sea else None,
        potential_savings=potential_savings,
        savings_percentage=savings_percentage,
        recommendation=recommendation,
        recommendation_reason=reason,
        timeline_flexibility=flexibility,
        available_days=available_days,
        daily_carrying_cost=daily_carrying_cost,
        is_reliable=len(considered) >= cfg.min_quotes_for_reliability and bool(air or sea),
        quotes_considered=len(considered),
        air_quotes=[q.source for q in air],
        sea_quotes=[q.source for q in sea],
        chart_air=[_chart_point(q) for q in air],
        chart_sea=[_chart_point(q) for q in sea],
    )


def _normalize_quote(quote: QuoteInput, index: int, cfg: AnalysisConfig) -> NormalizedQuote:
    prefix = f"quotes[{index}]"
    # etd is not used by the comparison but a malformed value is still an input error
    to_moment(quote.etd, f"{prefix}.etd")
    label = None
    if quote.forwarder is not None:
        label = quote.forwarder.short_code
    return NormalizedQuote(
        source=quote,
        total_amount=to_amount(quote.total_amount, f"{prefix}.total_amount"),
        transit_days=to_days(quote.transit_days, f"{prefix}.transit_days"),
        eta=to_moment(quote.eta, f"{prefix}.eta"),
        forwarder_label=label or cfg.unknown_forwarder_label,
        field_prefix=prefix,
    )


def _recommend(
    best_air: NormalizedQuote | None,
    best_sea: NormalizedQuote | None,
    required: datetime | None,
    savings_percentage: int | None,
    potential_savings: Decimal | None,
    cfg: AnalysisConfig,
) -> tuple[str | None, str | None]:
    """Pick a transport mode. First matching rule wins."""
    if not best_air and not best_sea:
        return None, None
    if best_sea and not best_air:
        return SEA, REASON_ONLY_SEA
    if best_air and not best_sea:
        return AIR, REASON_ONLY_AIR

    if required is None:
        return None, None

    eta = best_sea.eta
    if eta is None or eta > required:
        return AIR, REASON_SEA_MISSES_DEADLINE

    buffer_days = _days_between(eta, required)
    if buffer_days >= cfg.safe_buffer_days:
        pct = savings_percentage if savings_percentage is not None else "n/a"
        return SEA, (
            f"Sea freight arrives {buffer_days} days before deadline with "
            f"{pct}% cost savings (${_format_money(potential_savings)})"
        )
    return SEA, (
        f"Sea freight meets deadline with minimal buffer ({buffer_days} days). "
        "Consider air if timing is critical."
    )


def _timeline_flexibility(
    ready: datetime | None,
    required: datetime | None,
    cfg: AnalysisConfig,
) -> tuple[str, int | None]:
    if ready is None or required is None:
        return "low", None

    available_days = _days_between(ready, required)
    if available_days >= cfg.high_flexibility_days:
        return "high", available_days
    if available_days >= cfg.medium_flexibility_days:
        return "medium", available_days
    return "low", available_days


def _chart_point(quote: NormalizedQuote) -> ChartPoint:
    return ChartPoint(
        forwarder_label=quote.forwarder_label,
        transit_days=quote.transit_days,
        cost=quote.total_amount,
        eta=_iso(quote.source.eta),
    )


def _days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounded up."""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def _round_half_away(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _format_money(amount: Decimal) -> str:
    """9000 → '9,000'; 9000.5 → '9,000.50'."""
    if amount == amount.to_integral_value():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"


def _iso(value) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _quote_to_dict(quote: QuoteInput | None) -> dict | None:
    if quote is None:
        return None
    return {
        "id": quote.id,
        "request_id": quote.request_id,
        "forwarder_id": quote.forwarder_id,
        "mode": quote.mode,
        "status": quote.status,
        "total_amount": float(Decimal(str(quote.total_amount))),
        "transit_days": quote.transit_days,
        "etd": _iso(quote.etd),
        "eta": _iso(quote.eta),
        "forwarder": (
            {
                "id": quote.forwarder.id,
                "name": quote.forwarder.name,
                "short_code": quote.forwarder.short_code,
            }
            if quote.forwarder
            else None
        ),
    }
