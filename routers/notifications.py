from fastapi import APIRouter

from notification_service import send_notification
from schemas import NotificationCreate, SuccessResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])

@router.post("/{user_id}", response_model=SuccessResponse)
async def notify_user(user_id: str, notification: NotificationCreate):
    return {"success": await send_notification(user_id, notification)}
