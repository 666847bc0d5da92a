from storefront.data.models import ProductModel
from storefront.data.seed import DEMO_PRODUCTS, seed
from storefront.services.cache_service import get_cache
from storefront.services.notification_service import NotificationService, send_order_notification_task


class TestHealth:
    def test_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["services"] == {"database": "connected", "cache": "connected"}

    def test_cache_disabled(self, app, client):
        app.dependency_overrides[get_cache] = lambda: None

        assert client.get("/health").json()["services"]["cache"] == "disabled"


class TestSeed:
    def test_seed_only_into_empty_catalog(self, db):
        assert seed(db) == len(DEMO_PRODUCTS)
        assert seed(db) == 0
        assert db.query(ProductModel).count() == len(DEMO_PRODUCTS)


class TestNotifications:
    def test_task_result(self):
        result = send_order_notification_task.delay(1, 42)
        assert result.get() == {"user_id": 1, "order_id": 42, "status": "sent"}

    def test_service_enqueues(self):
        assert NotificationService.send_order_notification(1, 42) is True
