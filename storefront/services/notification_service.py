# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia po zlozeniu zamowienia, wysylane przez Celery.
    Zamowienie jest juz zacommitowane - blad kolejki tylko logujemy.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int) -> bool:
        try:
            send_order_notification_task.delay(user_id, order_id)
            return True
        except Exception as e:
            logger.warning(f"Failed to enqueue notification for order {order_id}: {e}")
            return False


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} placed")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
