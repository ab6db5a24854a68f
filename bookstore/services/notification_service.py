# bookstore/services/notification_service.py
from decimal import Decimal

from bookstore.celery_worker import celery_app
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zamowieniach, wysylane asynchronicznie przez Celery.
    """

    @staticmethod
    def send_order_placed(user_id: int, order_id: int, total: Decimal):
        send_order_placed_task.delay(user_id, order_id, str(total))

    @staticmethod
    def send_status_changed(user_id: int, order_id: int, status: str, deleted: bool):
        send_order_status_task.delay(user_id, order_id, status, deleted)


@celery_app.task(name="bookstore.services.notification_service.send_order_placed_task")
def send_order_placed_task(user_id: int, order_id: int, total: str):
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, total {total}")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="bookstore.services.notification_service.send_order_status_task")
def send_order_status_task(user_id: int, order_id: int, status: str, deleted: bool):
    if deleted:
        logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} closed")
    else:
        logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} is now {status}")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
