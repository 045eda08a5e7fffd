from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freightview.database import get_db
from freightview.dependencies import get_current_user
from freightview.models.forwarder import Forwarder
from freightview.models.user import User
from freightview.schemas.forwarder import ForwarderListResponse, ForwarderResponse

router = APIRouter()


@router.get("", response_model=ForwarderListResponse)
async def list_forwarders(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    result = await db.execute(select(Forwarder).order_by(Forwarder.name))
    return ForwarderListResponse(
        forwarders=[ForwarderResponse.model_validate(f) for f in result.scalars().all()]
    )
