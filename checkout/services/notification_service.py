# checkout/services/notification_service.py
from decimal import Decimal

from checkout.celery_worker import celery_app
from checkout.utils.settings import NOTIFICATIONS_ENABLED
from checkout.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zamowieniach przez Celery.
    Wywolywane dopiero po commicie, blad kolejki nie cofa zamowienia.
    """

    def __init__(self, enabled: bool = NOTIFICATIONS_ENABLED):
        self.enabled = enabled

    def order_created(self, user_id: int, order_id: int, total_amount: Decimal):
        self._enqueue(send_order_created_notification, user_id, order_id, str(total_amount))

    def order_status_changed(self, user_id: int, order_id: int, status: str):
        self._enqueue(send_order_status_notification, user_id, order_id, status)

    def _enqueue(self, task, *args):
        if not self.enabled:
            return
        try:
            task.delay(*args)
        except Exception as e:
            # broker niedostepny, zamowienie juz zapisane
            logger.warning(f"Could not enqueue {task.name} for args {args}: {e}")


@celery_app.task(name="checkout.services.notification_service.send_order_created_notification")
def send_order_created_notification(user_id: int, order_id: int, total_amount: str):
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, total {total_amount}")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="checkout.services.notification_service.send_order_status_notification")
def send_order_status_notification(user_id: int, order_id: int, status: str):
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} is now {status}")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
