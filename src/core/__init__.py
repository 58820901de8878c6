"""
Core business logic modules for ResumeCraft

Contains:
- Question Generator: Phase-managed interview question recommendation
- Security: CSRF tokens, session tokens, password hashing, user resolution
- Video Worker: Celery tasks for interview recordings
"""

from src.core.question_generator import QuestionGenerator
from src.core.security import UserRepository
from src.core.worker import enqueue_video_job, process_video, start_worker

__all__ = [
    "QuestionGenerator",
    "UserRepository",
    "enqueue_video_job",
    "process_video",
    "start_worker",
]
