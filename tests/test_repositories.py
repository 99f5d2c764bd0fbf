"""Tests for the ad account and campaign repositories and their shared base."""

import pytest

from conftest import FakeHTTPClient, fast_http_config
from linkedin_ads.api.adaccounts import (
    AdAccountQueryBuilder,
    AdAccountRepository,
    AdAccountSearchInput,
)
from linkedin_ads.api.campaigns import (
    CampaignQueryBuilder,
    CampaignRepository,
    CampaignSearchInput,
    extract_next_page_token,
)
from linkedin_ads.core.context import RequestContext
from linkedin_ads.core.exceptions import (
    DecodeError,
    ProviderError,
    RequestFailedError,
    SerializationError,
    TransportError,
)
from linkedin_ads.core.protocols import Response
from linkedin_ads.infrastructure.http_client import RetryingHTTPClient

BASE_URL = "https://api.linkedin.com/rest"


def ad_account_repository(client, logger=None) -> AdAccountRepository:
    return AdAccountRepository(client, AdAccountQueryBuilder(BASE_URL, "202505", "tok"), logger)


def campaign_repository(client, logger=None) -> CampaignRepository:
    return CampaignRepository(client, CampaignQueryBuilder(BASE_URL, "202505", "tok"), logger)


class TestAdAccountRepository:
    def test_elements_and_paging_pass_through(self):
        payload = {
            "elements": [{"id": 1, "name": "Acme", "status": "ACTIVE"}],
            "paging": {"start": 0, "count": 10, "total": 1},
        }
        client = FakeHTTPClient.json(payload)
        ctx = RequestContext()

        result = ad_account_repository(client).search_ad_accounts(
            AdAccountSearchInput(status=["ACTIVE"]), ctx
        )

        assert result.elements == payload["elements"]
        assert result.paging == payload["paging"]
        assert result.to_dict() == payload
        call = client.calls[0]
        assert call["url"].endswith("search=(status:(values:List(ACTIVE)))")
        assert call["headers"]["Authorization"] == "Bearer tok"
        assert call["ctx"] is ctx

    def test_missing_elements_and_paging(self):
        client = FakeHTTPClient.json({})

        result = ad_account_repository(client).search_ad_accounts(AdAccountSearchInput())

        assert result.elements == []
        assert result.paging == {}
        assert result.to_dict() == {"elements": []}

    def test_transport_error_is_wrapped(self, recording_logger):
        cause = TransportError("max retries exceeded: request failed: refused", attempts=4)
        client = FakeHTTPClient(error=cause)

        with pytest.raises(RequestFailedError) as exc_info:
            ad_account_repository(client, recording_logger).search_ad_accounts(
                AdAccountSearchInput()
            )

        assert exc_info.value.message == (
            "failed to make request: max retries exceeded: request failed: refused"
        )
        assert exc_info.value.__cause__ is cause
        message, tags = recording_logger.errors[0]
        assert message == "failed to make request"
        assert tags["url"] == client.calls[0]["url"]
        assert "refused" in tags["error"]

    def test_serialization_error_is_wrapped(self):
        client = FakeHTTPClient(error=SerializationError("failed to marshal request body: x"))

        with pytest.raises(RequestFailedError, match="failed to make request"):
            ad_account_repository(client).search_ad_accounts(AdAccountSearchInput())

    def test_network_exhaustion_end_to_end(self, session, closed_port_url, recording_logger):
        client = RetryingHTTPClient(fast_http_config(max_retries=2), session=session)
        base_url = closed_port_url.rsplit("/", 1)[0]
        repository = AdAccountRepository(
            client, AdAccountQueryBuilder(base_url, "202505", "tok"), recording_logger
        )

        with pytest.raises(RequestFailedError) as exc_info:
            repository.search_ad_accounts(AdAccountSearchInput())

        assert "request failed" in str(exc_info.value)
        assert session.calls == 3
        assert [m for m, _ in recording_logger.errors] == ["failed to make request"]

    def test_json_error_body(self, recording_logger):
        client = FakeHTTPClient.json({"message": "Invalid token", "status": 401}, status_code=401)

        with pytest.raises(ProviderError) as exc_info:
            ad_account_repository(client, recording_logger).search_ad_accounts(
                AdAccountSearchInput()
            )

        error = exc_info.value
        assert error.status_code == 401
        assert error.parsed_body == {"message": "Invalid token", "status": 401}
        assert error.message == (
            'linkedin api error: status 401, body: {"message": "Invalid token", "status": 401}'
        )
        message, tags = recording_logger.errors[0]
        assert message == "linkedin api responded with error"
        assert tags["status"] == "401"
        assert "Invalid token" in tags["body"]

    def test_text_error_body(self):
        client = FakeHTTPClient(Response(502, {}, b"  Bad Gateway \n"))

        with pytest.raises(ProviderError) as exc_info:
            ad_account_repository(client).search_ad_accounts(AdAccountSearchInput())

        assert exc_info.value.message == "linkedin api error: status 502, body: Bad Gateway"
        assert exc_info.value.parsed_body is None

    def test_empty_error_body(self, recording_logger):
        client = FakeHTTPClient(Response(403, {}, b""))

        with pytest.raises(ProviderError) as exc_info:
            ad_account_repository(client, recording_logger).search_ad_accounts(
                AdAccountSearchInput()
            )

        assert exc_info.value.message == "linkedin api error: status 403"
        _, tags = recording_logger.errors[0]
        assert "body" not in tags

    def test_logged_body_is_truncated(self, recording_logger):
        client = FakeHTTPClient(Response(500, {}, b"x" * 2000))

        with pytest.raises(ProviderError):
            ad_account_repository(client, recording_logger).search_ad_accounts(
                AdAccountSearchInput()
            )

        _, tags = recording_logger.errors[0]
        assert len(tags["body"]) == 500

    @pytest.mark.parametrize(
        "body",
        [b"not json", b"[1, 2]", b'{"elements": {"id": 1}}', b'{"elements": [], "paging": 3}'],
    )
    def test_malformed_envelope(self, recording_logger, body):
        client = FakeHTTPClient(Response(200, {}, body))

        with pytest.raises(DecodeError) as exc_info:
            ad_account_repository(client, recording_logger).search_ad_accounts(
                AdAccountSearchInput()
            )

        assert exc_info.value.message.startswith("failed to decode response: ")
        assert recording_logger.errors[0][0] == "failed to decode response"

    def test_non_object_element(self):
        client = FakeHTTPClient.json({"elements": [{"id": 1}, "oops"]})

        with pytest.raises(DecodeError) as exc_info:
            ad_account_repository(client).search_ad_accounts(AdAccountSearchInput())

        assert exc_info.value.index == 1

    def test_without_logger_failures_still_raise(self):
        client = FakeHTTPClient(Response(400, {}, b""))

        with pytest.raises(ProviderError):
            ad_account_repository(client).search_ad_accounts(AdAccountSearchInput())


class TestCampaignRepository:
    def test_next_page_token_is_extracted(self):
        payload = {
            "elements": [{"id": 10, "name": "Spring"}],
            "paging": {"next": "https://api.linkedin.com/rest/adAccounts/1/adCampaigns?q=search&pageToken=ABC123"},
        }
        client = FakeHTTPClient.json(payload)

        result = campaign_repository(client).search_campaigns(
            CampaignSearchInput(account_id="1", status=["ACTIVE"])
        )

        assert result.elements == [{"id": 10, "name": "Spring"}]
        assert result.next_page_token == "ABC123"
        assert result.has_next_page
        assert result.to_dict() == {
            "elements": [{"id": 10, "name": "Spring"}],
            "metadata": {"nextPageToken": "ABC123"},
        }

    def test_last_page_has_empty_token(self):
        client = FakeHTTPClient.json({"elements": [], "paging": {"count": 0}})

        result = campaign_repository(client).search_campaigns(CampaignSearchInput(account_id="1"))

        assert result.next_page_token == ""
        assert not result.has_next_page
        assert result.to_dict() == {"elements": [], "metadata": {}}

    def test_page_token_is_sent(self):
        client = FakeHTTPClient.json({"elements": []})

        campaign_repository(client).search_campaigns(
            CampaignSearchInput(account_id="1", page_token="ABC123", page_size=2)
        )

        assert client.calls[0]["url"].endswith("q=search&pageSize=2&pageToken=ABC123")

    def test_provider_error(self, recording_logger):
        client = FakeHTTPClient.json({"message": "Not found"}, status_code=404)

        with pytest.raises(ProviderError) as exc_info:
            campaign_repository(client, recording_logger).search_campaigns(
                CampaignSearchInput(account_id="1")
            )

        assert exc_info.value.status_code == 404
        assert recording_logger.errors[0][1]["status"] == "404"


@pytest.mark.parametrize(
    "paging, expected",
    [
        (None, ""),
        ({}, ""),
        ({"next": ""}, ""),
        ({"next": 42}, ""),
        ({"next": "https://example.com/x?q=search"}, ""),
        ({"next": "https://example.com/x?pageToken=T%2B1&q=search"}, "T+1"),
        ({"next": "/rest/adAccounts/1/adCampaigns?pageToken=XYZ"}, "XYZ"),
    ],
)
def test_extract_next_page_token(paging, expected):
    assert extract_next_page_token(paging) == expected
