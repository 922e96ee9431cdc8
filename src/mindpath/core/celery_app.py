from __future__ import annotations

from celery import Celery

from mindpath.config import (
    get_celery_broker_url,
    get_celery_result_backend,
    get_celery_task_always_eager,
)

celery_app = Celery(
    "mindpath",
    broker=get_celery_broker_url(),
    backend=get_celery_result_backend(),
    include=["mindpath.tasks.analysis"],
)

celery_app.conf.task_track_started = True
celery_app.conf.task_always_eager = get_celery_task_always_eager()
