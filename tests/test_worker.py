"""
Video worker and worker entry point tests.

Redis is replaced by a small in-memory stand-in implementing the handful
of commands the processor uses. Tasks are called directly, so no broker
is needed.
"""
import json
import logging
import random

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from scripts import start_worker as start_worker_script
from src.config.settings import Settings
from src.core import worker as worker_module
from src.core.worker import (
    PROCESS_VIDEO_TASK,
    VideoProcessor,
    create_celery_app,
    enqueue_video_job,
    failed_jobs_key,
    interview_reports_key,
    process_video,
)
from src.models.report import VideoJob


class InMemoryRedis:

    def __init__(self):
        self.lists: dict[str, list[str]] = {}
        self.values: dict[str, str] = {}
        self.sets: dict[str, set[str]] = {}
        self.failing_writes = 0

    def rpush(self, key, *values):
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    def set(self, key, value):
        if self.failing_writes:
            self.failing_writes -= 1
            raise RedisConnectionError("redis went away")
        self.values[key] = value
        return True

    def sadd(self, key, *members):
        self.sets.setdefault(key, set()).update(members)
        return len(members)


@pytest.fixture
def redis_client():
    return InMemoryRedis()


@pytest.fixture
def processor(redis_client, monkeypatch):
    processor = VideoProcessor(redis_client, rng=random.Random(3))
    monkeypatch.setattr(worker_module, "get_video_processor", lambda: processor)
    return processor


@pytest.fixture
def job():
    return VideoJob(interview_id="iv-1", s3_key="videos/iv-1.webm", video_id="vid-1")


def wire(job: VideoJob) -> dict:
    return job.model_dump(mode="json", by_alias=True)


class TestVideoProcessor:

    def test_process_job_stores_report(self, processor, redis_client, job):
        report = processor.process_job(job)

        stored = json.loads(redis_client.values["reports:vid-1"])
        assert stored["interviewId"] == "iv-1"
        assert 0 <= stored["score"]["communication"] <= 100
        assert redis_client.sets[interview_reports_key("iv-1")] == {report.report_id}

    def test_process_job_propagates_storage_errors(self, processor, redis_client, job):
        redis_client.failing_writes = 1

        with pytest.raises(RedisConnectionError):
            processor.process_job(job)

    def test_record_failure_keeps_payload(self, processor, redis_client):
        processor.record_failure("task-1", {"videoId": "vid-9"}, ValueError("bad payload"))

        entry = json.loads(redis_client.lists[failed_jobs_key("video-processing")][0])
        assert entry["taskId"] == "task-1"
        assert entry["payload"] == {"videoId": "vid-9"}
        assert entry["error"] == "ValueError: bad payload"


class TestProcessVideoTask:

    def test_returns_stored_report(self, processor, redis_client, job):
        result = process_video(wire(job))

        assert result["videoId"] == "vid-1"
        assert json.loads(redis_client.values["reports:vid-1"])["reportId"] == result["reportId"]

    def test_redis_blip_is_raised_for_retry(self, processor, redis_client, job):
        redis_client.failing_writes = 1

        with pytest.raises(RedisConnectionError):
            process_video(wire(job))

        # Next delivery succeeds once Redis is back
        assert process_video(wire(job))["videoId"] == "vid-1"

    def test_retry_policy(self):
        assert process_video.name == PROCESS_VIDEO_TASK
        assert process_video.acks_late is True
        assert process_video.reject_on_worker_lost is True
        assert process_video.max_retries == 3
        assert RedisConnectionError in process_video.autoretry_for

    def test_failure_is_recorded(self, processor, redis_client):
        payload = {"videoId": "only"}

        process_video.on_failure(ValueError("missing fields"), "task-2", (payload,), {}, None)

        entry = json.loads(redis_client.lists[failed_jobs_key("video-processing")][0])
        assert entry["taskId"] == "task-2"
        assert entry["payload"] == payload

    def test_failure_recording_survives_redis_outage(self, monkeypatch, caplog):
        class DownRedis(InMemoryRedis):
            def rpush(self, key, *values):
                raise RedisConnectionError("redis went away")

        down = VideoProcessor(DownRedis())
        monkeypatch.setattr(worker_module, "get_video_processor", lambda: down)

        with caplog.at_level(logging.ERROR):
            process_video.on_failure(ValueError("boom"), "task-3", ({},), {}, None)

        assert "Could not record failed job task-3" in caplog.text


def test_enqueue_sends_wire_payload(monkeypatch, job):
    sent = {}

    class Result:
        id = job.job_id

    def fake_apply_async(args=None, task_id=None, **options):
        sent.update(args=args, task_id=task_id)
        return Result()

    monkeypatch.setattr(process_video, "apply_async", fake_apply_async)

    assert enqueue_video_job(job) == job.job_id
    assert sent["task_id"] == job.job_id
    assert sent["args"][0] == {
        "jobId": job.job_id,
        "interviewId": "iv-1",
        "s3Key": "videos/iv-1.webm",
        "videoId": "vid-1",
    }


class TestCeleryApp:

    def test_delivery_settings(self):
        app = create_celery_app(Settings(_env_file=None))

        assert app.conf.task_acks_late is True
        assert app.conf.task_reject_on_worker_lost is True
        assert app.conf.worker_prefetch_multiplier == 1
        assert app.conf.task_default_queue == "video-processing"
        assert app.conf.task_routes[PROCESS_VIDEO_TASK]["queue"] == "video-processing"

    def test_reconnects_to_broker_forever(self):
        app = create_celery_app(Settings(_env_file=None))

        assert app.conf.broker_connection_retry is True
        assert app.conf.broker_connection_retry_on_startup is True
        assert app.conf.broker_connection_max_retries is None

    def test_broker_defaults_to_redis_url(self):
        app = create_celery_app(Settings(
            _env_file=None,
            redis_url="redis://localhost:6390/2",
            video_queue_name="videos",
        ))

        assert app.conf.broker_url == "redis://localhost:6390/2"
        assert app.conf.result_backend == "redis://localhost:6390/2"
        assert app.conf.task_default_queue == "videos"

    def test_explicit_broker_url(self):
        app = create_celery_app(Settings(
            _env_file=None,
            celery_broker_url="redis://broker:6379/1",
        ))

        assert app.conf.broker_url == "redis://broker:6379/1"


def test_startup_failure_exits_with_status_1(monkeypatch, caplog):
    def broken_start():
        raise RuntimeError("cannot reach redis")

    monkeypatch.setattr(start_worker_script, "start_worker", broken_start)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(SystemExit) as exc_info:
            start_worker_script.cli()

    assert exc_info.value.code == 1
    assert any(
        record.exc_info and "cannot reach redis" in str(record.exc_info[1])
        for record in caplog.records
    )


def test_clean_shutdown_exits_normally(monkeypatch):
    class StoppedWorker:
        exitcode = 0

        def start(self):
            pass

    monkeypatch.setattr(start_worker_script, "start_worker", lambda: StoppedWorker())

    start_worker_script.cli()
