"""Fire-and-forget job producer for the external Celery workers."""

import logging

from celery import Celery

logger = logging.getLogger(__name__)

THUMBNAIL_TASK = "files_manager.thumbnails"
WELCOME_TASK = "files_manager.welcome"


class JobQueue:
    def __init__(self, broker_url: str):
        self.celery_app = Celery("files_manager", broker=broker_url)

    def enqueue(self, task_name: str, payload: dict) -> bool:
        """Best effort: a broker failure is logged, never raised."""
        try:
            self.celery_app.send_task(task_name, kwargs=payload, retry=False)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Dropped job %s %s: %s", task_name, payload, exc)
            return False
        logger.debug("Enqueued job %s %s", task_name, payload)
        return True

    def enqueue_thumbnails(self, file_id: int, user_id: int) -> bool:
        return self.enqueue(THUMBNAIL_TASK, {"fileId": str(file_id), "userId": str(user_id)})

    def enqueue_welcome(self, user_id: int) -> bool:
        return self.enqueue(WELCOME_TASK, {"userId": str(user_id)})

    def close(self) -> None:
        self.celery_app.close()
