import uuid
from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from freightview.database import get_db
from freightview.dependencies import get_current_user
from freightview.models.user import User
from freightview.schemas.quote import (
    CreateQuoteRequest,
    CreateQuoteResponse,
    QuoteListResponse,
    QuoteResponse,
    QuoteSummary,
)
from freightview.services.shipment_service import shipment_service

router = APIRouter()


@router.get("/{request_id}/quotes", response_model=QuoteListResponse)
async def list_quotes(
    request_id: uuid.UUID,
    mode: Literal["air", "sea"] | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """All quotes for a request, cheapest first, with per-mode summary."""
    quotes = await shipment_service.list_quotes(db, request_id, user, mode=mode)
    return QuoteListResponse(
        quotes=[QuoteResponse.model_validate(q) for q in quotes],
        summary=QuoteSummary(**shipment_service.summarize(quotes)),
    )


@router.post("/{request_id}/quotes", status_code=201, response_model=CreateQuoteResponse)
async def create_quote(
    request_id: uuid.UUID,
    req: CreateQuoteRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Manually add a quote received from a forwarder."""
    quote = await shipment_service.create_quote(db, request_id, user, req.model_dump())
    return CreateQuoteResponse(quote=QuoteResponse.model_validate(quote))
