"""
Interview API endpoints

Drives the mock interview question by question:
- Recommending the next question for a candidate
- Checking question quality
- Queueing interview recordings for analysis
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, status
from kombu.exceptions import OperationalError
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.api.dependencies import get_current_user, get_question_generator, get_video_enqueuer
from src.core.question_generator import QuestionGenerator, validate_question_quality
from src.models.auth import User
from src.models.interview import InterviewPhase
from src.models.profile import CandidateProfile
from src.models.question import InterviewQuestion, QuestionType
from src.models.report import VideoJob

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class NextQuestionRequest(BaseModel):
    """Request model for the next question."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    profile: CandidateProfile
    interview_types: list[QuestionType] = Field(default_factory=lambda: list(QuestionType))
    asked_topics: list[str] = Field(default_factory=list)
    asked_question_count: int | None = Field(default=None, ge=0)


class NextQuestionResponse(BaseModel):
    """Next question, or ``complete`` once the budget is used up."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: InterviewQuestion | None = None
    phase: InterviewPhase | None = None
    question_number: int
    total_questions: int
    complete: bool


class QualityResponse(BaseModel):
    valid: bool


class AttachVideoRequest(BaseModel):
    """A recording uploaded to object storage for an interview."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    interview_id: str = Field(..., min_length=1)
    s3_key: str = Field(..., min_length=1)
    video_id: str = Field(..., min_length=1)


# ============================================================================
# REST ENDPOINTS
# ============================================================================

@router.post("/next-question", response_model=NextQuestionResponse)
async def next_question(
    request: NextQuestionRequest,
    generator: QuestionGenerator = Depends(get_question_generator),
) -> NextQuestionResponse:
    """
    Recommend the next interview question.

    Invalid profiles are rejected with 422 before reaching the generator.
    """
    recommendation = generator.recommend_next_question(
        request.profile,
        request.interview_types,
        request.asked_topics,
        asked_question_count=request.asked_question_count,
    )

    if recommendation.complete:
        logger.info(f"Interview complete for {request.profile.role} candidate")

    return NextQuestionResponse(
        question=recommendation.question,
        phase=recommendation.phase,
        question_number=recommendation.question_number,
        total_questions=recommendation.total_questions,
        complete=recommendation.complete,
    )


@router.post("/validate-question", response_model=QualityResponse)
async def validate_question(question: InterviewQuestion) -> QualityResponse:
    """Check that a question is contextual rather than exam-style."""
    return QualityResponse(valid=validate_question_quality(question))


@router.post("/attach-video", status_code=status.HTTP_202_ACCEPTED)
def attach_video(
    request: AttachVideoRequest,
    user: User = Depends(get_current_user),
    enqueue: Callable[[VideoJob], str] = Depends(get_video_enqueuer),
) -> dict:
    """
    Queue an uploaded recording for analysis.

    Returns 503 when the job queue is unreachable.
    """
    job = VideoJob(
        interview_id=request.interview_id,
        s3_key=request.s3_key,
        video_id=request.video_id,
    )

    try:
        job_id = enqueue(job)
    except OperationalError as e:
        logger.error(f"Could not queue video {job.video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Video queue unavailable",
        )

    logger.info(f"User {user.id} attached video {job.video_id} to interview {job.interview_id}")
    return {"ok": True, "jobId": job_id}
