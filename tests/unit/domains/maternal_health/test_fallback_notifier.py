"""Tests for FallbackNotifier."""

import pytest

from maternal_care.domains.maternal_health.application.services import FallbackNotifier
from tests.utils.fakes import FakeNotifier

ADDRESS = "+250788000001"


@pytest.mark.unit
class TestFallbackNotifier:
    """Ordered channel chain."""

    async def test_first_channel_success_stops_chain(self, whatsapp, sms):
        chain = FallbackNotifier([whatsapp, sms])

        report = await chain.deliver(ADDRESS, "Hello")

        assert report.delivered
        assert report.channel == "whatsapp"
        assert len(report.attempts) == 1
        assert sms.sent == []

    async def test_falls_back_to_second_channel(self, sms):
        whatsapp = FakeNotifier("whatsapp", default=False)
        chain = FallbackNotifier([whatsapp, sms])

        report = await chain.deliver(ADDRESS, "Hello")

        assert report.delivered
        assert report.channel == "sms"
        assert [a.channel for a in report.attempts] == ["whatsapp", "sms"]
        assert sms.sent == [(ADDRESS, "Hello")]

    async def test_exception_counts_as_failed_channel(self, sms):
        whatsapp = FakeNotifier("whatsapp", outcomes=[RuntimeError("socket closed")])
        chain = FallbackNotifier([whatsapp, sms])

        report = await chain.deliver(ADDRESS, "Hello")

        assert report.delivered
        assert report.attempts[0].success is False
        assert report.attempts[0].error == "socket closed"

    async def test_timeout_counts_as_failed_channel(self, sms):
        slow = FakeNotifier("whatsapp", delay=1.0)
        chain = FallbackNotifier([slow, sms], timeout_seconds=0.05)

        report = await chain.deliver(ADDRESS, "Hello")

        assert report.channel == "sms"
        assert report.attempts[0].error.startswith("timed out")

    async def test_all_channels_failed(self):
        chain = FallbackNotifier([FakeNotifier("whatsapp", default=False), FakeNotifier("sms", default=False)])

        report = await chain.deliver(ADDRESS, "Hello")

        assert not report.delivered
        assert report.channel is None
        assert report.error_summary == "whatsapp: delivery failed; sms: delivery failed"

    async def test_empty_chain(self):
        chain = FallbackNotifier([])

        report = await chain.deliver(ADDRESS, "Hello")

        assert not report.delivered
        assert report.error_summary == "no channel configured"

    async def test_send_returns_bool(self, whatsapp):
        chain = FallbackNotifier([whatsapp])

        assert await chain.send(ADDRESS, "Hello") is True
        assert chain.channels == ["whatsapp"]
