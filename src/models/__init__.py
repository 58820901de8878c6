"""
Data models and schemas for ResumeCraft

Contains Pydantic models for:
- Candidate profiles
- Interview questions and flow
- Users
- Video analysis reports
"""

from src.models.profile import CandidateProfile, ExperienceLevel
from src.models.question import InterviewQuestion, QuestionDifficulty, QuestionType
from src.models.interview import InterviewPhase, Recommendation
from src.models.auth import User, UserRole
from src.models.report import ReportScore, VideoJob, VideoReport

__all__ = [
    # Profile
    "CandidateProfile",
    "ExperienceLevel",
    # Question
    "InterviewQuestion",
    "QuestionDifficulty",
    "QuestionType",
    # Interview
    "InterviewPhase",
    "Recommendation",
    # Auth
    "User",
    "UserRole",
    # Report
    "ReportScore",
    "VideoJob",
    "VideoReport",
]
