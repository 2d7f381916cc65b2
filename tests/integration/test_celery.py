"""Integration tests for the Celery configuration."""

import pytest

pytestmark = pytest.mark.integration


class TestCeleryConfig:
    """Verifies that Celery loads through Django."""

    def test_celery_app_is_importable(self):
        from config.celery import app

        assert app.main == "restfulpoc"

    def test_celery_app_exported_from_init(self):
        from config import celery_app

        assert celery_app.main == "restfulpoc"

    def test_customer_tasks_are_registered(self):
        from config import celery_app

        assert "customers.process_customer_deleted" in celery_app.tasks
        assert "customers.relay_pending_customer_deletions" in celery_app.tasks

    def test_celery_serializer_is_json(self, settings):
        assert settings.CELERY_TASK_SERIALIZER == "json"
        assert settings.CELERY_RESULT_SERIALIZER == "json"
        assert settings.CELERY_ACCEPT_CONTENT == ["json"]

    def test_celery_timezone_matches_django(self, settings):
        assert settings.CELERY_TIMEZONE == settings.TIME_ZONE

    def test_relay_is_scheduled(self, settings):
        schedule = settings.CELERY_BEAT_SCHEDULE
        tasks = {entry["task"] for entry in schedule.values()}
        assert "customers.relay_pending_customer_deletions" in tasks

    def test_tests_run_tasks_eagerly(self, settings):
        assert settings.CELERY_TASK_ALWAYS_EAGER is True
