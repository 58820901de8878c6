"""
Shared fixtures.

Run with: pytest -v
"""
import random

import pytest
from fastapi.testclient import TestClient

from main import app
from src.api.dependencies import get_question_generator, get_user_repository
from src.config.settings import Settings, get_settings
from src.core.question_generator import QuestionGenerator
from src.core.security import UserRepository, create_access_token
from src.models.auth import User, UserRole
from src.models.profile import CandidateProfile, ExperienceLevel


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="development",
        debug_auth="",
        nextauth_secret="test-secret",
        jwt_secret="",
    )


@pytest.fixture
def member() -> User:
    return User(id="user-1", email="ada@example.com", name="Ada")


@pytest.fixture
def admin() -> User:
    return User(id="admin-1", email="root@example.com", name="Root", role=UserRole.ADMIN)


@pytest.fixture
def users(member, admin) -> UserRepository:
    return UserRepository([member, admin])


@pytest.fixture
def generator() -> QuestionGenerator:
    return QuestionGenerator(rng=random.Random(7))


@pytest.fixture
def profile() -> CandidateProfile:
    return CandidateProfile(
        role="Backend",
        experience_level=ExperienceLevel.MID,
        technical_score=82,
        communication_score=65,
        confidence_score=70,
        resume_skills=["PostgreSQL", "Kafka", "Go"],
    )


@pytest.fixture
def client(settings, users, generator):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_user_repository] = lambda: users
    app.dependency_overrides[get_question_generator] = lambda: generator

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def member_token(member, settings) -> str:
    return create_access_token(member.id, settings)


@pytest.fixture
def admin_token(admin, settings) -> str:
    return create_access_token(admin.id, settings)
