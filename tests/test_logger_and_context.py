"""Tests for the loguru-backed Logger collaborator and RequestContext."""

import threading
import time

import pytest
from loguru import logger

from conftest import FakeHTTPClient
from linkedin_ads.api.adaccounts import (
    AdAccountQueryBuilder,
    AdAccountRepository,
    AdAccountSearchInput,
)
from linkedin_ads.core.context import RequestContext
from linkedin_ads.core.exceptions import ProviderError
from linkedin_ads.infrastructure.logger import LoguruLogger


@pytest.fixture
def captured():
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


class TestLoguruLogger:
    def test_tags_are_bound_and_rendered(self, captured):
        LoguruLogger().error(None, "failed to make request", {"url": "https://x", "error": "boom"})

        record = captured[-1]
        assert record["level"].name == "ERROR"
        assert record["message"] == "failed to make request error=boom url=https://x"
        assert record["extra"]["url"] == "https://x"
        assert record["extra"]["error"] == "boom"
        assert record["extra"]["component"] == "linkedin_ads"

    def test_record_points_at_caller(self, captured):
        LoguruLogger().info(RequestContext(), "done", {})

        assert captured[-1]["function"] == "test_record_points_at_caller"
        assert captured[-1]["message"] == "done"

    def test_repository_records_point_at_the_shared_error_hook(self, captured):
        repository = AdAccountRepository(
            FakeHTTPClient.json({"message": "Invalid access token"}, status_code=401),
            AdAccountQueryBuilder("https://api.linkedin.com/rest", "202505", "tok"),
            LoguruLogger(),
        )

        with pytest.raises(ProviderError):
            repository.search_ad_accounts(AdAccountSearchInput())

        record = captured[-1]
        assert record["level"].name == "ERROR"
        assert record["name"] == "linkedin_ads.api.base"
        assert record["function"] == "_log_error"

    def test_warn_maps_to_warning(self, captured):
        LoguruLogger(name="reporting").warn(None, "slow", {"status": "429"})

        record = captured[-1]
        assert record["level"].name == "WARNING"
        assert record["extra"]["component"] == "reporting"

    def test_braces_in_values_are_not_formatted(self, captured):
        LoguruLogger().error(None, "linkedin api responded with error", {"body": '{"a": 1}'})

        assert captured[-1]["message"].endswith('body={"a": 1}')


class TestRequestContext:
    def test_background_never_expires(self):
        ctx = RequestContext.background()

        assert ctx.remaining() is None
        assert not ctx.done()
        assert ctx.error() is None
        assert ctx.sleep(0.001) is True

    def test_cancel(self):
        ctx = RequestContext()
        ctx.cancel()

        assert ctx.done()
        assert ctx.error() == "context canceled"
        assert ctx.sleep(1.0) is False

    def test_deadline(self):
        ctx = RequestContext(timeout=0.05)

        assert ctx.remaining() <= 0.05
        assert ctx.sleep(1.0) is False
        time.sleep(0.01)
        assert ctx.done()
        assert ctx.error() == "context deadline exceeded"
        assert ctx.remaining() == 0.0

    def test_cancel_wakes_sleeper(self):
        ctx = RequestContext()
        threading.Timer(0.05, ctx.cancel).start()

        start = time.monotonic()
        assert ctx.sleep(5.0) is False
        assert time.monotonic() - start < 2.0

    def test_cancel_callbacks(self):
        ctx = RequestContext()
        fired = []
        ctx.add_cancel_callback(lambda: fired.append("kept"))
        removed = lambda: fired.append("removed")
        ctx.add_cancel_callback(removed)
        ctx.remove_cancel_callback(removed)

        ctx.cancel()
        ctx.cancel()

        assert fired == ["kept"]

    def test_callback_on_cancelled_context_runs_at_once(self):
        ctx = RequestContext()
        ctx.cancel()
        fired = []

        ctx.add_cancel_callback(lambda: fired.append(True))

        assert fired == [True]
