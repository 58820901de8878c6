"""
Video Worker - Processes interview recordings queued for analysis.

Jobs run as Celery tasks on the ``video-processing`` queue with Redis as
broker and result backend. Each job builds a report for one recording and
stores it under ``reports:<videoId>``, indexed per interview under
``interview:<interviewId>:reports``.

Delivery guarantees:
- Tasks are acknowledged only after they finish (``acks_late``), so a
  worker crash mid-job hands the job to another worker
- Redis blips while storing a report are retried with backoff
- Lost broker connections are re-established instead of stopping the worker
- Jobs that fail for good are recorded on ``<queue>:failed``

Run with:
    python -m scripts.start_worker
"""

import json
import logging
import random
from datetime import datetime, timezone
from typing import Any

import redis
from celery import Celery, Task
from kombu import Exchange, Queue
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from src.config.settings import Settings, get_settings
from src.models.report import ReportScore, VideoJob, VideoReport

logger = logging.getLogger(__name__)

PROCESS_VIDEO_TASK = "video.process"

# Storage errors worth another attempt
TRANSIENT_ERRORS = (RedisConnectionError, RedisTimeoutError)


def interview_reports_key(interview_id: str) -> str:
    return f"interview:{interview_id}:reports"


def failed_jobs_key(queue_name: str) -> str:
    return f"{queue_name}:failed"


# ============================================================================
# CELERY APP
# ============================================================================

def create_celery_app(settings: Settings | None = None) -> Celery:
    """Build the Celery application for the video-processing queue."""
    settings = settings or get_settings()

    broker_url = settings.celery_broker_url or settings.redis_url
    result_backend = settings.celery_result_backend or settings.redis_url
    queue_name = settings.video_queue_name

    app = Celery("resumecraft", broker=broker_url, backend=result_backend)

    app.conf.update(
        # Serialization
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        enable_utc=True,
        # Execution
        task_track_started=True,
        task_time_limit=settings.task_time_limit_seconds,
        # Acknowledge after completion; requeue if the worker dies
        task_acks_late=True,
        task_reject_on_worker_lost=True,
        task_default_retry_delay=settings.task_retry_delay_seconds,
        # Results
        result_expires=3600,
        result_extended=True,
        # Worker
        worker_prefetch_multiplier=1,
        worker_concurrency=settings.worker_concurrency,
        worker_hijack_root_logger=False,
        # Keep reconnecting to the broker, forever
        broker_connection_retry=True,
        broker_connection_retry_on_startup=True,
        broker_connection_max_retries=None,
        # Queues
        task_default_queue=queue_name,
        task_queues=(
            Queue(queue_name, Exchange("video"), routing_key="video.#"),
        ),
        task_routes={
            PROCESS_VIDEO_TASK: {"queue": queue_name, "routing_key": PROCESS_VIDEO_TASK},
        },
    )

    return app


celery_app = create_celery_app()


# ============================================================================
# PROCESSING
# ============================================================================

class VideoProcessor:
    """
    Turns video jobs into stored reports.

    The Redis client only needs the ``set``, ``sadd`` and ``rpush``
    commands.
    """

    def __init__(
        self,
        client: redis.Redis,
        queue_name: str = "video-processing",
        rng: random.Random | None = None,
    ):
        self.client = client
        self.queue_name = queue_name
        self.rng = rng or random.Random()

    def analyze(self, job: VideoJob) -> VideoReport:
        """
        Score a recording.

        Scores are placeholders until a real analyzer is wired in.
        """
        score = ReportScore(
            communication=self.rng.randint(0, 100),
            confidence=self.rng.randint(0, 100),
            correctness=self.rng.randint(0, 100),
        )
        return VideoReport(
            interview_id=job.interview_id,
            video_id=job.video_id,
            score=score,
        )

    def process_job(self, job: VideoJob) -> VideoReport:
        """
        Analyze one job and persist its report.

        Raises:
            RedisError: Storage errors propagate so the task can retry
        """
        report = self.analyze(job)

        self.client.set(report.storage_key, report.model_dump_json(by_alias=True))
        self.client.sadd(interview_reports_key(job.interview_id), report.report_id)

        logger.info(f"Stored report {report.report_id} for interview {job.interview_id}")
        return report

    def record_failure(self, task_id: str, payload: Any, exc: BaseException) -> None:
        """Keep a failed job so it can be inspected or replayed."""
        entry = {
            "taskId": task_id,
            "payload": payload,
            "error": f"{type(exc).__name__}: {exc}",
            "failedAt": datetime.now(timezone.utc).isoformat(),
        }
        self.client.rpush(failed_jobs_key(self.queue_name), json.dumps(entry, default=str))


_processor: VideoProcessor | None = None


def get_video_processor() -> VideoProcessor:
    """Get the video processor singleton."""
    global _processor

    if _processor is None:
        settings = get_settings()
        client = redis.Redis.from_url(settings.redis_url, decode_responses=True)
        _processor = VideoProcessor(client, queue_name=settings.video_queue_name)

    return _processor


# ============================================================================
# TASKS
# ============================================================================

class VideoTask(Task):
    """Base task: late acks, and failed jobs recorded once retries run out."""

    acks_late = True
    reject_on_worker_lost = True

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        logger.error(f"Video job {task_id} failed: {exc}")

        payload = args[0] if args else kwargs.get("payload")
        try:
            get_video_processor().record_failure(task_id, payload, exc)
        except RedisError as e:
            logger.error(f"Could not record failed job {task_id}: {e}")


_settings = get_settings()


@celery_app.task(
    bind=True,
    base=VideoTask,
    name=PROCESS_VIDEO_TASK,
    autoretry_for=TRANSIENT_ERRORS,
    retry_backoff=True,
    retry_backoff_max=120,
    retry_jitter=True,
    max_retries=_settings.task_max_retries,
    default_retry_delay=_settings.task_retry_delay_seconds,
)
def process_video(self, payload: dict[str, Any]) -> dict[str, Any]:
    """
    Analyze one recording.

    Args:
        payload: ``VideoJob`` in wire form (interviewId, s3Key, videoId)

    Returns:
        The stored report in wire form
    """
    job = VideoJob.model_validate(payload)
    logger.info(
        f"Processing video job {self.request.id} "
        f"(video {job.video_id}, key {job.s3_key}, attempt {self.request.retries + 1})"
    )

    report = get_video_processor().process_job(job)
    return report.model_dump(mode="json", by_alias=True)


def enqueue_video_job(job: VideoJob) -> str:
    """Queue a recording for analysis. Returns the task id."""
    result = process_video.apply_async(
        args=[job.model_dump(mode="json", by_alias=True)],
        task_id=job.job_id,
    )
    logger.info(f"Queued video job {result.id} for interview {job.interview_id}")
    return result.id


def start_worker(settings: Settings | None = None):
    """Build a Celery worker consuming the video-processing queue."""
    settings = settings or get_settings()

    logger.info(f"Starting worker for {settings.video_queue_name}")

    return celery_app.Worker(
        queues=[settings.video_queue_name],
        concurrency=settings.worker_concurrency,
        loglevel="INFO",
    )
