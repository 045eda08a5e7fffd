"""Shipment requests router — create, list, inspect, update and delete requests."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from freightview.database import get_db
from freightview.dependencies import get_current_user
from freightview.models.user import User
from freightview.schemas.shipment import (
    CreateShipmentRequest,
    DeleteRequestResponse,
    RequestDetailEnvelope,
    RequestEnvelope,
    RequestListResponse,
    ShipmentRequestDetail,
    ShipmentRequestResponse,
    UpdateShipmentRequest,
)
from freightview.services.shipment_service import shipment_service

router = APIRouter()


@router.get("", response_model=RequestListResponse)
async def list_requests(
    status: str | None = Query(None),
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List the caller's requests, newest first. ``limit`` is capped at 100."""
    requests, count = await shipment_service.list_requests(
        db, user, status=status, limit=limit, offset=offset
    )
    return RequestListResponse(
        requests=[ShipmentRequestResponse.model_validate(r) for r in requests],
        count=count,
    )


@router.post("", status_code=201, response_model=RequestEnvelope)
async def create_request(
    req: CreateShipmentRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    shipment = await shipment_service.create_request(db, user, req.model_dump())
    return RequestEnvelope(request=ShipmentRequestResponse.model_validate(shipment))


@router.get("/{request_id}", response_model=RequestDetailEnvelope)
async def get_request(
    request_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """A single request with all of its quotes and their forwarders."""
    shipment = await shipment_service.get_user_request(db, request_id, user, with_quotes=True)
    return RequestDetailEnvelope(request=ShipmentRequestDetail.model_validate(shipment))


@router.patch("/{request_id}", response_model=RequestEnvelope)
async def update_request(
    request_id: uuid.UUID,
    req: UpdateShipmentRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    updates = req.model_dump(exclude_unset=True)
    shipment = await shipment_service.update_request(db, request_id, user, updates)
    return RequestEnvelope(request=ShipmentRequestResponse.model_validate(shipment))


@router.delete("/{request_id}", response_model=DeleteRequestResponse)
async def delete_request(
    request_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    await shipment_service.delete_request(db, request_id, user)
    return DeleteRequestResponse(message="Request deleted successfully", deleted_id=request_id)
