"""
HTTP API tests using FastAPI's TestClient.
"""
import asyncio
import re

import pytest
from fastapi.testclient import TestClient
from kombu.exceptions import OperationalError

from main import app
from src.api.dependencies import cleanup, get_user_repository, get_video_enqueuer
from src.config.settings import Settings, get_settings
from src.core import security

HEX_64 = re.compile(r"^[0-9a-f]{64}$")


def use_settings(**overrides):
    data = dict(_env_file=None, nextauth_secret="test-secret")
    data.update(overrides)
    app.dependency_overrides[get_settings] = lambda: Settings(**data)


class TestCsrf:

    def test_issues_token_in_body_and_cookie(self, client):
        response = client.get("/api/csrf")

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert HEX_64.match(body["csrfToken"])
        assert response.cookies.get("csrfToken") == body["csrfToken"]

    def test_cookie_attributes(self, client):
        response = client.get("/api/csrf")
        header = response.headers["set-cookie"]
        lowered = header.lower()

        assert header.startswith(f"csrfToken={response.json()['csrfToken']}")
        assert "samesite=lax" in lowered
        assert "max-age=86400" in lowered
        assert "path=/" in lowered
        assert "httponly" not in lowered
        assert "secure" not in lowered

    def test_secure_cookie_in_production(self, client):
        use_settings(environment="production")

        response = client.get("/api/csrf")

        assert "secure" in response.headers["set-cookie"].lower()

    def test_new_token_each_call(self, client):
        first = client.get("/api/csrf").json()["csrfToken"]
        second = client.get("/api/csrf").json()["csrfToken"]

        assert first != second


class TestDebugCookies:

    @pytest.mark.parametrize("value", ["", "false", "yes", "1", "true ", "truee"])
    def test_disabled_unless_true(self, client, value):
        use_settings(debug_auth=value)

        response = client.get("/api/debug/cookies", headers={"cookie": "token=abc"})

        assert response.status_code == 404
        assert response.json() == {"error": "Debug endpoint disabled"}

    @pytest.mark.parametrize("value", ["true", "TRUE", "True"])
    def test_echoes_headers_when_enabled(self, client, value):
        use_settings(debug_auth=value)

        response = client.get(
            "/api/debug/cookies",
            headers={"cookie": "token=abc; theme=dark", "authorization": "Bearer xyz"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "cookieHeader": "token=abc; theme=dark",
            "authHeader": "Bearer xyz",
        }

    def test_missing_headers_echo_null(self, client):
        use_settings(debug_auth="true")

        response = client.get("/api/debug/cookies")

        assert response.status_code == 200
        assert response.json() == {"cookieHeader": None, "authHeader": None}


class TestDashboardGuard:

    def test_redirects_without_token(self, client):
        response = client.get("/dashboard", follow_redirects=False)

        assert response.status_code in (302, 303, 307)
        assert response.headers["location"] == "/auth/login"
        assert "user" not in response.text

    def test_redirects_with_invalid_token(self, client):
        client.cookies.set("token", "not-a-session")

        response = client.get("/dashboard/resumes", follow_redirects=False)

        assert response.headers["location"] == "/auth/login"

    def test_bearer_header_does_not_open_dashboard(self, client, member_token):
        response = client.get(
            "/dashboard",
            headers={"authorization": f"Bearer {member_token}"},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/auth/login"

    def test_renders_for_signed_in_user(self, client, member_token):
        client.cookies.set("token", member_token)

        response = client.get("/dashboard", follow_redirects=False)

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "ada@example.com"

    def test_sub_pages_are_guarded_too(self, client, member_token):
        client.cookies.set("token", member_token)

        response = client.get("/dashboard/interviews/42", follow_redirects=False)

        assert response.status_code == 200
        assert response.json()["section"] == "interviews/42"


class TestAdmin:

    def test_requires_admin(self, client, member_token):
        assert client.get("/api/admin/users").status_code == 403

        response = client.get("/api/admin/users", headers={"authorization": f"Bearer {member_token}"})
        assert response.status_code == 403

    def test_lists_users(self, client, admin_token):
        response = client.get("/api/admin/users", headers={"authorization": f"Bearer {admin_token}"})

        assert response.status_code == 200
        assert {user["email"] for user in response.json()} == {"ada@example.com", "root@example.com"}


PROFILE = {
    "role": "Backend",
    "experienceLevel": "3-5",
    "technicalScore": 80,
    "communicationScore": 70,
    "confidenceScore": 65,
    "resumeSkills": ["Go", "Kafka"],
}


class TestInterviewApi:

    def test_first_question(self, client):
        response = client.post("/api/interview/next-question", json={"profile": PROFILE})

        assert response.status_code == 200
        body = response.json()
        assert body["complete"] is False
        assert body["phase"] == "opening"
        assert body["questionNumber"] == 1
        assert body["totalQuestions"] == 6
        assert body["question"]["difficulty"] == "intro"
        assert body["question"]["id"]

    def test_coding_depth_question(self, client):
        response = client.post("/api/interview/next-question", json={
            "profile": {**PROFILE, "technicalScore": 40},
            "interviewTypes": ["coding", "behavioral"],
            "askedQuestionCount": 4,
        })

        question = response.json()["question"]
        assert question["type"] == "coding"
        assert question["requiresCoding"] is True
        assert question["languages"]

    def test_complete_after_budget(self, client):
        response = client.post("/api/interview/next-question", json={
            "profile": PROFILE,
            "askedQuestionCount": 6,
        })

        body = response.json()
        assert body["complete"] is True
        assert body["question"] is None

    def test_invalid_experience_level(self, client):
        response = client.post("/api/interview/next-question", json={
            "profile": {**PROFILE, "experienceLevel": "10+"},
        })

        assert response.status_code == 422

    def test_invalid_interview_type(self, client):
        response = client.post("/api/interview/next-question", json={
            "profile": PROFILE,
            "interviewTypes": ["trivia"],
        })

        assert response.status_code == 422

    def test_validate_question(self, client):
        good = client.post("/api/interview/validate-question", json={
            "prompt": "Design a cache for 1M requests/day.",
            "type": "system-design",
            "difficulty": "core",
        })
        generic = client.post("/api/interview/validate-question", json={
            "prompt": "What is a cache?",
            "type": "technical",
            "difficulty": "intro",
        })

        assert good.json() == {"valid": True}
        assert generic.json() == {"valid": False}

    def test_coding_question_without_languages_rejected(self, client):
        response = client.post("/api/interview/validate-question", json={
            "prompt": "Implement an LRU cache.",
            "type": "coding",
            "difficulty": "core",
            "requiresCoding": True,
        })

        assert response.status_code == 422


class TestMetadata:

    def test_experience_levels_in_order(self, client):
        levels = client.get("/api/metadata/experience-levels").json()

        assert [level["id"] for level in levels] == ["fresher", "1-3", "3-5", "5+"]
        assert [level["rank"] for level in levels] == [0, 1, 2, 3]

    def test_question_types(self, client):
        types = {item["id"] for item in client.get("/api/metadata/question-types").json()}

        assert types == {"technical", "behavioral", "coding", "system-design", "managerial"}

    def test_difficulties(self, client):
        difficulties = client.get("/api/metadata/difficulties").json()

        assert [item["id"] for item in difficulties] == ["intro", "core", "deep"]

    def test_roles(self, client):
        roles = {role["id"] for role in client.get("/api/metadata/roles").json()}

        assert {"backend", "frontend", "manager"} <= roles


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


VIDEO = {"interviewId": "iv-1", "s3Key": "videos/iv-1.webm", "videoId": "vid-1"}


class TestAttachVideo:

    @pytest.fixture
    def queued(self):
        jobs = []

        def enqueue(job):
            jobs.append(job)
            return job.job_id

        app.dependency_overrides[get_video_enqueuer] = lambda: enqueue
        return jobs

    def test_requires_session(self, client, queued):
        response = client.post("/api/interview/attach-video", json=VIDEO)

        assert response.status_code == 401
        assert queued == []

    def test_queues_job(self, client, queued, member_token):
        response = client.post(
            "/api/interview/attach-video",
            json=VIDEO,
            headers={"authorization": f"Bearer {member_token}"},
        )

        assert response.status_code == 202
        assert len(queued) == 1
        assert response.json() == {"ok": True, "jobId": queued[0].job_id}
        assert (queued[0].interview_id, queued[0].s3_key, queued[0].video_id) == (
            "iv-1", "videos/iv-1.webm", "vid-1",
        )

    def test_missing_fields_rejected(self, client, queued, member_token):
        response = client.post(
            "/api/interview/attach-video",
            json={"interviewId": "iv-1"},
            headers={"authorization": f"Bearer {member_token}"},
        )

        assert response.status_code == 422
        assert queued == []

    def test_queue_unavailable(self, client, member_token):
        def enqueue(job):
            raise OperationalError("Error 111 connecting to localhost:6379")

        app.dependency_overrides[get_video_enqueuer] = lambda: enqueue

        response = client.post(
            "/api/interview/attach-video",
            json=VIDEO,
            headers={"authorization": f"Bearer {member_token}"},
        )

        assert response.status_code == 503


class TestAuthFlow:
    """
    Runs against the app as deployed: no dependency overrides, settings
    from the environment, users seeded at startup.
    """

    @pytest.fixture
    def live_client(self, monkeypatch):
        monkeypatch.setenv("NODE_ENV", "development")
        monkeypatch.setenv("NEXTAUTH_SECRET", "live-secret")
        monkeypatch.setenv("ADMIN_EMAIL", "owner@example.com")
        monkeypatch.setenv("ADMIN_PASSWORD", "owner-password")
        monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)
        get_settings.cache_clear()
        asyncio.run(cleanup())

        with TestClient(app) as client:
            yield client

        get_settings.cache_clear()
        asyncio.run(cleanup())

    def login(self, client, email, password):
        return client.post("/api/auth/login", json={"email": email, "password": password})

    def test_admin_seeded_at_startup(self, live_client):
        assert app.dependency_overrides == {}

        users = get_user_repository()
        assert len(users) > 0
        assert users.find_by_email("owner@example.com").is_admin

    def test_register_login_opens_dashboard(self, live_client):
        registered = live_client.post("/api/auth/register", json={
            "email": "Grace@example.com",
            "password": "hopper-1906",
            "name": "Grace",
        })
        assert registered.status_code == 201
        assert registered.json()["user"]["email"] == "grace@example.com"
        assert "hashedPassword" not in registered.text

        response = self.login(live_client, "grace@example.com", "hopper-1906")
        assert response.status_code == 200
        assert response.cookies.get("token") == response.json()["token"]

        dashboard = live_client.get("/dashboard", follow_redirects=False)
        assert dashboard.status_code == 200
        assert dashboard.json()["user"]["email"] == "grace@example.com"

    def test_session_cookie_attributes(self, live_client):
        response = self.login(live_client, "owner@example.com", "owner-password")
        lowered = response.headers["set-cookie"].lower()

        assert lowered.startswith("token=")
        assert "httponly" in lowered
        assert "samesite=lax" in lowered
        assert "path=/" in lowered
        assert "secure" not in lowered

    def test_seeded_admin_lists_users(self, live_client):
        token = self.login(live_client, "owner@example.com", "owner-password").json()["token"]

        response = live_client.get("/api/admin/users", headers={"authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert "owner@example.com" in {user["email"] for user in response.json()}

    @pytest.mark.parametrize("email, password", [
        ("owner@example.com", "wrong-password"),
        ("nobody@example.com", "owner-password"),
    ])
    def test_bad_credentials(self, live_client, email, password):
        response = self.login(live_client, email, password)

        assert response.status_code == 401
        assert "token" not in response.cookies

    def test_duplicate_registration(self, live_client):
        response = live_client.post("/api/auth/register", json={
            "email": "OWNER@example.com",
            "password": "another-password",
        })

        assert response.status_code == 409

    def test_short_password_rejected(self, live_client):
        response = live_client.post("/api/auth/register", json={
            "email": "short@example.com",
            "password": "abc",
        })

        assert response.status_code == 422

    def test_logout_closes_dashboard(self, live_client):
        self.login(live_client, "owner@example.com", "owner-password")
        assert live_client.get("/api/auth/session").json()["user"]["role"] == "ADMIN"

        live_client.post("/api/auth/logout")

        assert live_client.get("/api/auth/session").json() == {}
        dashboard = live_client.get("/dashboard", follow_redirects=False)
        assert dashboard.headers["location"] == "/auth/login"
