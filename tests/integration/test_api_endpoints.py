"""
Integration tests for the maternal care API.

Drives the FastAPI application over ASGI with the real container, an
in-memory database and a fake notification channel.
"""

from datetime import UTC, datetime, timedelta

import httpx
import pytest

from maternal_care.config.settings import Settings
from maternal_care.core.app_factory import create_app
from maternal_care.core.container import DependencyContainer, reset_container, set_container
from maternal_care.domains.maternal_health.application.services import ContentService, FallbackNotifier
from maternal_care.domains.maternal_health.domain.value_objects import ReminderStatus
from tests.utils.factories import make_reminder, make_subject
from tests.utils.fakes import FakeTextGenerator

API = "/api/v1"


@pytest.fixture
def settings() -> Settings:
    return Settings(ENVIRONMENT="test", REMINDER_SCHEDULER_ENABLED=False, DAILY_TIPS_ENABLED=False)


@pytest.fixture
def container(settings, session_factory, whatsapp):
    container = DependencyContainer(
        settings=settings,
        session_factory=session_factory,
        channels=FallbackNotifier([whatsapp]),
        content_service=ContentService(FakeTextGenerator()),
    )
    set_container(container)
    yield container
    reset_container()


@pytest.fixture
async def client(settings, container):
    app = create_app(settings)
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture
async def subject(subject_repository):
    """Pregnant subject in week 8 today."""
    lmp = datetime.now(UTC).date() - timedelta(days=59)
    return await subject_repository.save(make_subject(subject_id=None, last_menstrual_period=lmp))


# ============================================================================
# HEALTH AND PREGNANCY
# ============================================================================


@pytest.mark.integration
class TestPregnancyEndpoints:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "environment": "test"}
        assert "X-Request-ID" in response.headers

    async def test_calculate(self, client):
        response = await client.get(f"{API}/pregnancy/calculate", params={"lmp": "2024-01-01", "as_of": "2024-03-11"})

        assert response.status_code == 200
        data = response.json()
        assert data["current_week"] == 10
        assert data["current_day"] == 0
        assert data["trimester"] == 1
        assert data["expected_delivery_date"] == "2024-10-07"
        assert data["days_until_delivery"] == 210

    async def test_future_lmp(self, client):
        response = await client.get(f"{API}/pregnancy/calculate", params={"lmp": "2024-03-12", "as_of": "2024-03-11"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] is True
        assert body["code"] == "VALIDATION_ERROR"
        assert body["details"]["field"] == "lmp"

    async def test_malformed_lmp(self, client):
        response = await client.get(f"{API}/pregnancy/calculate", params={"lmp": "yesterday"})

        assert response.status_code == 400

    async def test_missing_lmp(self, client):
        response = await client.get(f"{API}/pregnancy/calculate")

        assert response.status_code == 422
        assert response.json()["message"] == "Validation error"

    async def test_request_id_is_echoed(self, client):
        response = await client.get(
            f"{API}/pregnancy/calculate",
            params={"lmp": "2024-01-01"},
            headers={"X-Request-ID": "abc123"},
        )

        assert response.headers["X-Request-ID"] == "abc123"


# ============================================================================
# SUBJECT REMINDERS
# ============================================================================


@pytest.mark.integration
class TestReminderEndpoints:
    async def test_upcoming_history_and_stats(self, client, reminder_store, subject):
        await reminder_store.insert_if_absent(make_reminder(subject_id=subject.id, current_week=7))
        await reminder_store.insert_if_absent(
            make_reminder(subject_id=subject.id, current_week=8, status=ReminderStatus.SENT)
        )

        upcoming = (await client.get(f"{API}/reminders/subjects/{subject.id}/upcoming")).json()
        history = (await client.get(f"{API}/reminders/subjects/{subject.id}/history")).json()
        stats = (await client.get(f"{API}/reminders/subjects/{subject.id}/stats")).json()

        assert upcoming["total"] == 1
        assert upcoming["reminders"][0]["current_week"] == 7
        assert upcoming["reminders"][0]["type"] == "anc"
        assert history["total"] == 2
        assert stats == {
            "subject_id": subject.id,
            "total": 2,
            "counts": {"pending": 1, "sent": 1, "failed": 0, "dismissed": 0},
        }

    async def test_unknown_subject(self, client):
        response = await client.get(f"{API}/reminders/subjects/999/upcoming")

        assert response.status_code == 404
        assert response.json()["code"] == "ENTITY_NOT_FOUND"

    async def test_dismiss(self, client, reminder_store, subject):
        stored = await reminder_store.insert_if_absent(make_reminder(subject_id=subject.id))

        response = await client.post(f"{API}/reminders/{stored.id}/dismiss")
        again = await client.post(f"{API}/reminders/{stored.id}/dismiss")

        assert response.status_code == 200
        assert response.json() == {"id": stored.id, "status": "dismissed"}
        assert again.status_code == 409
        assert again.json()["code"] == "INVALID_OPERATION"

    async def test_dismiss_unknown_reminder(self, client):
        response = await client.post(f"{API}/reminders/999/dismiss")

        assert response.status_code == 404

    async def test_send_test_reminder(self, client, subject, whatsapp, notification_log):
        response = await client.post(f"{API}/reminders/subjects/{subject.id}/test", json={"type": "vaccination"})

        assert response.status_code == 200
        assert response.json() == {"subject_id": subject.id, "sent": True}
        assert "vaccination" in whatsapp.sent[0][1]
        entries = await notification_log.list_for_subject(subject.id)
        assert entries[0].kind == "test"

    async def test_send_test_reminder_invalid_type(self, client, subject):
        response = await client.post(f"{API}/reminders/subjects/{subject.id}/test", json={"type": "lottery"})

        assert response.status_code == 422


# ============================================================================
# ADMIN
# ============================================================================


@pytest.mark.integration
class TestAdminEndpoints:
    async def test_sweep_then_dispatch(self, client, subject, whatsapp, reminder_store):
        sweep = await client.post(f"{API}/admin/reminders/run/antenatal_daily")
        repeat = await client.post(f"{API}/admin/reminders/run/antenatal_daily")
        dispatch = await client.post(f"{API}/admin/reminders/run/dispatch_frequent")

        assert sweep.status_code == 200
        assert sweep.json()["cadence"] == "antenatal_daily"
        assert sweep.json()["result"]["enqueued"] == 1
        assert repeat.json()["result"]["duplicates_skipped"] == 1
        assert dispatch.json()["result"]["sent"] == 1
        assert whatsapp.sent[0][1].startswith("Hello Aline! You're in week 8 of pregnancy.")
        history = await reminder_store.list_history(subject.id)
        assert [r.status for r in history] == [ReminderStatus.SENT]

    async def test_daily_tips_disabled(self, client):
        response = await client.post(f"{API}/admin/reminders/run/daily_tips")

        assert response.status_code == 409

    async def test_unknown_cadence(self, client):
        response = await client.post(f"{API}/admin/reminders/run/hourly")

        assert response.status_code == 422

    async def test_jobs_without_scheduler(self, client):
        response = await client.get(f"{API}/admin/reminders/jobs")

        assert response.status_code == 200
        assert response.json() == {"running": False, "jobs": []}

    async def test_unexpected_error_returns_500(self, client, container, monkeypatch):
        async def broken(*args, **kwargs):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(container.get_reminder_store(), "list_pending", broken)

        response = await client.post(f"{API}/admin/reminders/run/dispatch_frequent")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"
