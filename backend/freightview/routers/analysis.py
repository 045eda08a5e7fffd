"""Quote analysis router — air vs sea comparison for a shipment request."""

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freightview.database import get_db
from freightview.dependencies import get_analysis_config, get_current_user
from freightview.models.shipment import Quote, ShipmentRequest
from freightview.models.user import User
from freightview.schemas.analysis import QuoteAnalysisResponse
from freightview.schemas.quote import QuoteResponse
from freightview.schemas.shipment import ShipmentRequestResponse
from freightview.services.quote_analysis import (
    AnalysisConfig,
    ForwarderInput,
    QuoteInput,
    ShipmentInput,
    analyze,
)
from freightview.services.shipment_service import shipment_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _shipment_input(shipment: ShipmentRequest) -> ShipmentInput:
    return ShipmentInput(
        id=str(shipment.id),
        cargo_ready_date=shipment.cargo_ready_date,
        delivery_required_date=shipment.delivery_required_date,
        value_usd=shipment.value_usd,
    )


def _quote_input(quote: Quote) -> QuoteInput:
    forwarder = None
    if quote.forwarder is not None:
        forwarder = ForwarderInput(
            id=str(quote.forwarder.id),
            name=quote.forwarder.name,
            short_code=quote.forwarder.short_code,
        )
    return QuoteInput(
        id=str(quote.id),
        request_id=str(quote.request_id),
        forwarder_id=str(quote.forwarder_id),
        mode=quote.mode,
        total_amount=quote.total_amount,
        transit_days=quote.transit_days,
        etd=quote.etd,
        eta=quote.eta,
        status=quote.status,
        forwarder=forwarder,
    )


@router.get("/{request_id}/analysis", response_model=QuoteAnalysisResponse)
async def get_quote_analysis(
    request_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    config: AnalysisConfig = Depends(get_analysis_config),
):
    """Compare the request's air and sea quotes.

    Returns the best quote per mode, potential savings, a recommended mode
    with its reason, timeline flexibility, daily carrying cost and
    chart-ready series for both modes.
    """
    shipment = await shipment_service.get_user_request(db, request_id, user, with_quotes=True)
    quotes_by_id = {str(q.id): q for q in shipment.quotes}

    result = analyze(
        _shipment_input(shipment),
        [_quote_input(q) for q in shipment.quotes],
        config,
    )
    payload = result.to_dict()

    def _full_quote(q: QuoteInput | None) -> QuoteResponse | None:
        if q is None:
            return None
        return QuoteResponse.model_validate(quotes_by_id[q.id])

    logger.info(
        f"Analysis for request {request_id}: {result.quotes_considered} quotes, "
        f"recommendation={result.recommendation}"
    )

    return QuoteAnalysisResponse(
        best_air=_full_quote(result.best_air),
        best_sea=_full_quote(result.best_sea),
        potential_savings=payload["potential_savings"],
        recommendation=result.recommendation,
        recommendation_reason=result.recommendation_reason,
        factors=payload["factors"],
        chart_data=payload["chart_data"],
        analysis={
            "generated_at": datetime.now(timezone.utc),
            "quotes_analyzed": result.quotes_considered,
            "is_reliable": result.is_reliable,
        },
        request=ShipmentRequestResponse.model_validate(shipment),
        air_quotes=[_full_quote(q) for q in result.air_quotes],
        sea_quotes=[_full_quote(q) for q in result.sea_quotes],
    )
