from __future__ import annotations

from unittest.mock import MagicMock

from src.infrastructure.services.celery_config import (
    REMINDER_QUEUE,
    create_celery_app,
)
from src.main.worker import create_worker, main, worker_argv


def test_create_worker_applies_loaded_settings(monkeypatch) -> None:
    stale = create_celery_app(
        broker_url="amqp://stale",
        backend_url="redis://stale",
        reminder_schedule_hour=5,
    )
    monkeypatch.setattr("src.infrastructure.services.celery_config.celery_app", stale)
    monkeypatch.setenv("CELERY_BROKER_URL", "amqp://fresh")
    monkeypatch.setenv("CELERY_RESULT_BACKEND", "redis://fresh")
    monkeypatch.setenv("CELERY_REMINDER_SCHEDULE_HOUR", "9")

    worker_app = create_worker()

    assert worker_app is stale
    assert worker_app.main == "breeding_worker"
    assert worker_app.conf.broker_url == "amqp://fresh"
    assert worker_app.conf.result_backend == "redis://fresh"
    schedule = worker_app.conf.beat_schedule["generate-daily-reminders"]["schedule"]
    assert schedule.hour == {9}


def test_worker_argv_consumes_the_reminder_queue_with_beat() -> None:
    argv = worker_argv()

    assert argv[0] == "worker"
    assert f"--queues={REMINDER_QUEUE}" in argv
    assert "--beat" in argv


def test_main_invokes_worker(monkeypatch) -> None:
    stub_app = MagicMock()
    monkeypatch.setattr("src.main.worker.create_worker", lambda: stub_app)

    main()

    stub_app.worker_main.assert_called_once_with(worker_argv())
