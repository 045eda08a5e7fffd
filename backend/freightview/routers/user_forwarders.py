from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freightview.database import get_db
from freightview.dependencies import get_current_user
from freightview.models.user import User
from freightview.schemas.forwarder import (
    AddUserForwarderRequest,
    AddUserForwarderResponse,
    UserForwarderListResponse,
    UserForwarderResponse,
)
from freightview.services.user_forwarder_service import user_forwarder_service

router = APIRouter()


@router.get("", response_model=UserForwarderListResponse)
async def list_user_forwarders(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    entries = await user_forwarder_service.list_for_user(db, user)
    return UserForwarderListResponse(
        forwarders=[UserForwarderResponse.model_validate(e) for e in entries]
    )


@router.post("", status_code=201, response_model=AddUserForwarderResponse)
async def add_user_forwarder(
    req: AddUserForwarderRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    entry = await user_forwarder_service.add_for_user(db, user, req.model_dump())
    return AddUserForwarderResponse(user_forwarder=UserForwarderResponse.model_validate(entry))
