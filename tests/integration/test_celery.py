import pytest

pytestmark = pytest.mark.integration


class TestCeleryApp:
    def test_app_name_and_serializer(self):
        from config import celery_app

        assert celery_app.main == "bloomora"
        assert celery_app.conf.task_serializer == "json"

    def test_delivery_task_registered(self):
        from config import celery_app

        celery_app.loader.import_default_modules()
        assert "notifications.deliver_telegram_message" in celery_app.tasks
