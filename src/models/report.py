"""
Video analysis report models for ResumeCraft

Jobs are queued by the upload flow once an interview recording lands in
object storage; the worker turns each job into a report.
"""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class VideoJob(BaseModel):
    """Payload of a ``video-processing`` queue entry."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_id: str = Field(default_factory=lambda: uuid4().hex)
    interview_id: str = Field(..., min_length=1)
    s3_key: str = Field(..., min_length=1)
    video_id: str = Field(..., min_length=1)


class ReportScore(BaseModel):
    """Per-dimension scores, 0-100."""

    communication: int = Field(..., ge=0, le=100)
    confidence: int = Field(..., ge=0, le=100)
    correctness: int = Field(..., ge=0, le=100)


class VideoReport(BaseModel):
    """Result of analysing one interview recording."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    report_id: str = Field(default_factory=lambda: uuid4().hex)
    interview_id: str
    video_id: str
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    score: ReportScore
    notes: str = "Auto-generated placeholder report. Integrate real analysis here."

    @property
    def storage_key(self) -> str:
        return f"reports:{self.video_id}"
