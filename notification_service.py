import logging

from schemas import NotificationCreate
from stores import simulate_latency

logger = logging.getLogger(__name__)

async def send_notification(user_id: str, notification: NotificationCreate) -> bool:
    # No push provider yet; delivery is a log line
    await simulate_latency("send_notification")
    logger.info("Notification to %s: %s - %s", user_id, notification.title, notification.body)
    return True
