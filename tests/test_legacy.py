"""
Tests for LegacyConvertKitClient (API v3).

Covers credential placement, the forms/landing pages split, the paged
subscriber lookup and local argument validation.
"""

import pytest

from convertkit_sdk.auth import AuthError
from convertkit_sdk.exceptions import ClientError
from convertkit_sdk.exceptions import InvalidArgumentError
from convertkit_sdk.legacy import LegacyConvertKitClient
from tests.fakes import FakeTransport
from tests.fakes import json_response
from tests.fakes import make_settings

API = "https://api.convertkit.com/v3"
API_KEY = "legacy_api_key_9999"
API_SECRET = "legacy_api_secret_8888"

FORMS_PAYLOAD = {
    "forms": [
        {"id": 1, "name": "Old landing page", "type": "hosted", "archived": True},
        {"id": 2, "name": "Landing page", "type": "hosted", "archived": False},
        {"id": 3, "name": "Sidebar form", "type": "embed", "archived": False},
    ]
}


def make_client(*responses, **settings_overrides):
    transport = FakeTransport(list(responses))
    client = LegacyConvertKitClient(make_settings(**settings_overrides), transport=transport)
    return client, transport


@pytest.mark.asyncio
async def test_forms_exclude_landing_pages_and_archived():
    client, transport = make_client(json_response(FORMS_PAYLOAD))

    forms = await client.get_forms()

    assert [form["id"] for form in forms] == [3]
    call = transport.last_call
    assert call["url"] == f"{API}/forms"
    assert call["params"] == {"api_key": API_KEY}
    assert "Authorization" not in call["headers"]


@pytest.mark.asyncio
async def test_landing_pages_come_from_forms_endpoint():
    client, transport = make_client(json_response(FORMS_PAYLOAD))

    pages = await client.get_landing_pages()

    assert [page["id"] for page in pages] == [2]
    assert transport.last_call["url"] == f"{API}/forms"


@pytest.mark.asyncio
async def test_resource_without_collection_is_empty():
    client, _ = make_client(json_response({"unexpected": True}), json_response({}))

    assert await client.get_resources("tags") == []
    assert await client.get_resources("subscription_forms") == {}


@pytest.mark.asyncio
async def test_subscription_forms_mapping():
    client, transport = make_client(
        json_response(
            {
                "subscription_forms": [
                    {"id": 1, "form_id": 10},
                    {"id": 2, "form_id": 20, "archived": True},
                ]
            }
        )
    )

    assert await client.get_resources("subscription_forms") == {1: 10}
    assert transport.last_call["url"] == f"{API}/subscription_forms"


@pytest.mark.asyncio
@pytest.mark.parametrize("resource", ["sequences", "", "FORMS", None])
async def test_unsupported_resource_sends_no_request(resource):
    client, transport = make_client()

    with pytest.raises(InvalidArgumentError, match="unsupported resource"):
        await client.get_resources(resource)

    assert transport.request_count == 0


@pytest.mark.asyncio
async def test_subscriber_id_found_on_second_page():
    """
    GIVEN: two pages of subscribers, the target on the second
    WHEN: the subscriber ID is looked up by email
    THEN: both pages are requested in order and the match is returned
    """
    # given
    client, transport = make_client(
        json_response(
            {
                "total_pages": 2,
                "page": 1,
                "subscribers": [{"id": 1, "email_address": "first@acme.io"}],
            }
        ),
        json_response(
            {
                "total_pages": 2,
                "page": 2,
                "subscribers": [
                    {"id": 2, "email_address": "second@acme.io"},
                    {"id": 3, "email_address": "JANE@acme.io"},
                ],
            }
        ),
    )

    # when
    subscriber_id = await client.get_subscriber_id("jane@acme.io")

    # then
    assert subscriber_id == 3
    first, second = transport.request_calls
    assert first["url"] == f"{API}/subscribers"
    assert first["params"] == {
        "api_secret": API_SECRET,
        "status": "all",
        "email_address": "jane@acme.io",
    }
    assert second["params"]["page"] == 2


@pytest.mark.asyncio
async def test_subscriber_id_not_found_after_all_pages():
    client, transport = make_client(
        json_response({"total_pages": 2, "subscribers": []}),
        json_response({"total_pages": 2, "subscribers": [{"id": 9, "email_address": "x@acme.io"}]}),
    )

    assert await client.get_subscriber_id("jane@acme.io") is None
    assert transport.request_count == 2


@pytest.mark.asyncio
async def test_subscriber_scan_respects_page_cap(caplog):
    client, transport = make_client(
        json_response({"total_pages": 5, "subscribers": []}),
    )

    assert await client.get_subscriber_id("jane@acme.io", max_pages=1) is None
    assert transport.request_count == 1
    assert "Stopped subscriber lookup after 1 of 5 pages" in caplog.text


@pytest.mark.asyncio
async def test_subscriber_scan_single_page_without_total():
    client, transport = make_client(json_response({"subscribers": []}))

    assert await client.get_subscriber_id("jane@acme.io") is None
    assert transport.request_count == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["not-an-email", "jane@", 42])
async def test_subscriber_id_rejects_malformed_email(email):
    client, transport = make_client()

    with pytest.raises(InvalidArgumentError):
        await client.get_subscriber_id(email)

    assert transport.request_count == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("subscriber_id", [0, -1, True, "5"])
async def test_get_subscriber_rejects_invalid_id(subscriber_id):
    client, transport = make_client()

    with pytest.raises(InvalidArgumentError):
        await client.get_subscriber(subscriber_id)
    with pytest.raises(InvalidArgumentError):
        await client.get_subscriber_tags(subscriber_id)

    assert transport.request_count == 0


@pytest.mark.asyncio
async def test_get_subscriber_and_tags():
    client, transport = make_client()

    await client.get_subscriber(5)
    await client.get_subscriber_tags(5)

    subscriber_call, tags_call = transport.request_calls
    assert subscriber_call["url"] == f"{API}/subscribers/5"
    assert subscriber_call["params"] == {"api_secret": API_SECRET}
    assert tags_call["url"] == f"{API}/subscribers/5/tags"
    assert tags_call["params"] == {"api_key": API_KEY}


@pytest.mark.asyncio
async def test_add_tag():
    client, transport = make_client()

    await client.add_tag(12, {"email": "jane@acme.io", "first_name": "Jane"})

    call = transport.last_call
    assert call["method"] == "POST"
    assert call["url"] == f"{API}/tags/12/subscribe"
    assert call["json"] == {
        "email": "jane@acme.io",
        "first_name": "Jane",
        "api_key": API_KEY,
    }


@pytest.mark.asyncio
async def test_add_tag_validates_arguments():
    client, transport = make_client()

    with pytest.raises(InvalidArgumentError):
        await client.add_tag("12", {"email": "jane@acme.io"})
    with pytest.raises(InvalidArgumentError):
        await client.add_tag(12, ["jane@acme.io"])

    assert transport.request_count == 0


@pytest.mark.asyncio
async def test_form_subscribe_and_unsubscribe():
    client, transport = make_client()

    await client.form_subscribe(4, {"email": "jane@acme.io"})
    await client.form_unsubscribe({"email": "jane@acme.io"})

    subscribe_call, unsubscribe_call = transport.request_calls
    assert subscribe_call["url"] == f"{API}/forms/4/subscribe"
    assert subscribe_call["json"] == {"email": "jane@acme.io", "api_key": API_KEY}
    assert unsubscribe_call["method"] == "PUT"
    assert unsubscribe_call["url"] == f"{API}/unsubscribe"
    assert unsubscribe_call["json"] == {"email": "jane@acme.io", "api_secret": API_SECRET}


@pytest.mark.asyncio
async def test_sequences():
    client, transport = make_client()

    await client.get_sequences()
    await client.get_sequence_subscriptions(3, sort_order="desc")
    await client.add_subscriber_to_sequence(3, "jane@acme.io")

    list_call, subscriptions_call, subscribe_call = transport.request_calls
    assert list_call["params"] == {"api_key": API_KEY}
    assert subscriptions_call["url"] == f"{API}/sequences/3/subscriptions"
    assert subscriptions_call["params"] == {"api_secret": API_SECRET, "sort_order": "desc"}
    assert subscribe_call["url"] == f"{API}/courses/3/subscribe"
    assert subscribe_call["json"] == {"api_key": API_KEY, "email": "jane@acme.io"}


@pytest.mark.asyncio
async def test_purchases():
    client, transport = make_client()

    await client.list_purchases({"page": 2})
    await client.create_purchase({"purchase": {"transaction_id": "t-1"}})

    list_call, create_call = transport.request_calls
    assert list_call["params"] == {"page": 2, "api_secret": API_SECRET}
    assert create_call["json"] == {
        "purchase": {"transaction_id": "t-1"},
        "api_secret": API_SECRET,
    }


@pytest.mark.asyncio
async def test_get_account_uses_secret():
    client, transport = make_client(json_response({"name": "Acme"}))

    assert await client.get_account() == {"name": "Acme"}
    assert transport.last_call["params"] == {"api_secret": API_SECRET}


@pytest.mark.asyncio
async def test_failure_raises_typed_error():
    client, _ = make_client(json_response({"error": "Authorization Failed"}, 401))

    with pytest.raises(ClientError) as exc_info:
        await client.get_forms()

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_missing_credentials():
    client, transport = make_client(api_key="", api_secret="")

    with pytest.raises(AuthError):
        await client.get_forms()
    with pytest.raises(AuthError):
        await client.get_account()

    assert transport.request_count == 0
