from convertkit_sdk.normalizers import PaginationInfo
from convertkit_sdk.normalizers import collection
from convertkit_sdk.normalizers import find_subscriber_id
from convertkit_sdk.normalizers import first_subscriber_id
from convertkit_sdk.normalizers import split_forms
from convertkit_sdk.normalizers import subscription_form_mapping

FORMS_PAYLOAD = {
    "forms": [
        {"id": 1, "name": "Old landing page", "type": "hosted", "archived": True},
        {"id": 2, "name": "Landing page", "type": "hosted", "archived": False},
        {"id": 3, "name": "Sidebar form", "type": "embed", "archived": False},
    ]
}


def test_split_forms_returns_active_embedded_forms():
    assert split_forms(FORMS_PAYLOAD, "forms") == [FORMS_PAYLOAD["forms"][2]]


def test_split_forms_returns_active_landing_pages():
    assert split_forms(FORMS_PAYLOAD, "landing_pages") == [FORMS_PAYLOAD["forms"][1]]


def test_split_forms_keeps_api_order_and_treats_untyped_as_forms():
    payload = {"forms": [{"id": 5, "type": "modal"}, {"id": 4}, {"id": 6, "type": "hosted"}]}

    assert [form["id"] for form in split_forms(payload, "forms")] == [5, 4]


def test_missing_collection_yields_empty_result():
    assert split_forms({"error": "nope"}, "forms") == []
    assert split_forms(None, "landing_pages") == []
    assert collection({"tags": None}, "tags") == []
    assert collection([], "tags") == []


def test_subscription_form_mapping_excludes_archived():
    payload = {
        "subscription_forms": [
            {"id": 10, "form_id": 100, "archived": False},
            {"id": 11, "form_id": 101, "archived": True},
            {"id": 12, "form_id": 102},
        ]
    }

    assert subscription_form_mapping(payload) == {10: 100, 12: 102}


def test_subscription_form_mapping_accepts_bare_list():
    payload = [{"id": 10, "form_id": 100}]

    assert subscription_form_mapping(payload) == {10: 100}
    assert subscription_form_mapping("unexpected") == {}


def test_find_subscriber_id_ignores_case_and_picks_first_match():
    subscribers = [
        {"id": 1, "email_address": "someone@acme.io"},
        {"id": 2, "email_address": "Jane@Acme.io"},
        {"id": 3, "email_address": "jane@acme.io"},
    ]

    assert find_subscriber_id(subscribers, "jane@acme.io") == 2
    assert find_subscriber_id(subscribers, "nobody@acme.io") is None


def test_first_subscriber_id():
    assert first_subscriber_id({"subscribers": [{"id": 7}, {"id": 8}]}) == 7
    assert first_subscriber_id({"subscribers": []}) is None
    assert first_subscriber_id(None) is None


def test_pagination_info_from_payload():
    payload = {
        "tags": [],
        "pagination": {
            "has_previous_page": False,
            "has_next_page": True,
            "start_cursor": "WzFd",
            "end_cursor": "WzJd",
            "per_page": 2,
        },
    }

    info = PaginationInfo.from_payload(payload)

    assert info.has_next_page is True
    assert info.end_cursor == "WzJd"
    assert info.total_count is None
    assert PaginationInfo.from_payload({"tags": []}) is None


def test_subscription_form_mapping_skips_entries_without_id():
    payload = {
        "subscription_forms": [
            {"form_id": 100},
            {"id": None, "form_id": 101},
            {"id": 3, "form_id": 102},
        ]
    }

    assert subscription_form_mapping(payload) == {3: 102}
