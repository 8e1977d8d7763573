from fastapi import APIRouter, status

from product_api.api.responses import respond_success
from product_api.schemas.envelope import MessageData, SuccessEnvelope

router = APIRouter(tags=["health"])


@router.get("/ping", response_model=SuccessEnvelope[MessageData])
async def ping():
    return respond_success(status.HTTP_200_OK, {"message": "pong"})
