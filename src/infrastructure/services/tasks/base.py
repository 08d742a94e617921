"""Shared Celery infrastructure components."""

from celery import Task

from src.shared import get_logger

logger = get_logger(__name__)


class CallbackTask(Task):
    """Base task that reports each run of a reminder job to the structured log."""

    def on_success(self, retval, task_id, args, kwargs):
        summary = retval if isinstance(retval, dict) else {"result": retval}
        logger.info("task.succeeded", task_id=task_id, task=self.name, **summary)

    def on_retry(self, exc, task_id, args, kwargs, einfo):
        logger.warning(
            "task.retrying", task_id=task_id, task=self.name, error=str(exc)
        )

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        logger.error(
            "task.failed",
            task_id=task_id,
            task=self.name,
            error=str(exc),
            traceback=einfo.traceback,
            exc_info=exc,
        )
