"""Tests for the Twilio SMS notifier."""

from unittest.mock import MagicMock

import pytest
from twilio.base.exceptions import TwilioRestException

from maternal_care.domains.maternal_health.infrastructure.notifiers import TwilioSmsNotifier, truncate_sms


@pytest.fixture
def twilio_client() -> MagicMock:
    client = MagicMock()
    client.messages.create.return_value = MagicMock(sid="SM123")
    return client


@pytest.mark.unit
class TestTruncateSms:
    def test_short_message_unchanged(self):
        assert truncate_sms("Hello", 150) == "Hello"

    def test_long_message_is_cut(self):
        text = truncate_sms("a" * 200, 150)

        assert len(text) == 150
        assert text.endswith("...")

    def test_exact_length_unchanged(self):
        assert truncate_sms("a" * 150, 150) == "a" * 150


@pytest.mark.unit
class TestTwilioSmsNotifier:
    async def test_sends_message(self, twilio_client):
        notifier = TwilioSmsNotifier(twilio_client, "+15005550006")

        sent = await notifier.send("+250788000001", "Hello")

        assert sent is True
        twilio_client.messages.create.assert_called_once_with(
            body="Hello",
            from_="+15005550006",
            to="+250788000001",
        )

    async def test_truncates_long_body(self, twilio_client):
        notifier = TwilioSmsNotifier(twilio_client, "+15005550006", max_length=20)

        await notifier.send("+250788000001", "x" * 50)

        _, kwargs = twilio_client.messages.create.call_args
        assert len(kwargs["body"]) == 20

    async def test_twilio_rejection(self, twilio_client):
        twilio_client.messages.create.side_effect = TwilioRestException(400, "/Messages", msg="Invalid 'To' number")

        assert await TwilioSmsNotifier(twilio_client, "+15005550006").send("+250", "Hello") is False

    async def test_unexpected_error(self, twilio_client):
        twilio_client.messages.create.side_effect = ConnectionError("network down")

        assert await TwilioSmsNotifier(twilio_client, "+15005550006").send("+250788000001", "Hello") is False

    async def test_empty_address(self, twilio_client):
        assert await TwilioSmsNotifier(twilio_client, "+15005550006").send("", "Hello") is False
        twilio_client.messages.create.assert_not_called()

    def test_from_credentials(self):
        notifier = TwilioSmsNotifier.from_credentials("ACxxxxxxxx", "secret", "+15005550006", max_length=120)

        assert notifier.channel == "sms"

    def test_from_credentials_bounds_http_requests(self):
        notifier = TwilioSmsNotifier.from_credentials("ACxxxxxxxx", "secret", "+15005550006", timeout=5.0)

        assert notifier._client.http_client.timeout == 5.0
