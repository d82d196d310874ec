"""
Unit tests for DummyJsonUserDirectory adapter.

Uses httpx.MockTransport in place of the network to verify:
- Request shape for listing and registration
- Mapping of wire records to domain users
- Placeholder images for records without one
- Every failure mode surfaces as DataSourceError
"""

import json
import logging
from collections.abc import Callable
from dataclasses import replace

import httpx
import pytest

from src.adapters.dummyjson import DummyJsonUserDirectory, build_http_client
from src.domain.exceptions import DataSourceError
from src.domain.models import DEFAULT_PROFILE_IMAGE, Gender, RegistrationDraft

LISTING = {
    "users": [
        {
            "id": 1,
            "firstName": "Emily",
            "lastName": "Johnson",
            "gender": "female",
            "email": "emily.johnson@x.dummyjson.com",
            "phone": "+81 965-431-3024",
            "image": "https://dummyjson.com/icon/emilys/128",
            "age": 28,
        },
        {
            "id": 2,
            "firstName": "Michael",
            "lastName": "Williams",
            "gender": "male",
            "email": "michael.williams@x.dummyjson.com",
            "phone": "+49 258-627-6644",
        },
    ],
    "total": 208,
    "skip": 0,
    "limit": 2,
}


def make_directory(
    handler: Callable[[httpx.Request], httpx.Response], **kwargs
) -> DummyJsonUserDirectory:
    client = httpx.Client(base_url="https://dummyjson.test", transport=httpx.MockTransport(handler))
    return DummyJsonUserDirectory(client, **kwargs)


class TestProtocolCompliance:
    """Tests for UserDirectory protocol compliance."""

    def test_no_explicit_inheritance(self) -> None:
        """DummyJsonUserDirectory uses structural subtyping, not inheritance."""
        assert DummyJsonUserDirectory.__bases__ == (object,)

    def test_has_directory_methods(self) -> None:
        directory = make_directory(lambda request: httpx.Response(200, json={}))
        assert callable(directory.list_users)
        assert callable(directory.add_user)


class TestListUsers:
    """Tests for GET /users."""

    def test_requests_first_page_with_limit(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=LISTING)

        make_directory(handler, fetch_limit=12).list_users()

        assert seen[0].method == "GET"
        assert seen[0].url.path == "/users"
        assert seen[0].url.params["limit"] == "12"
        assert seen[0].url.params["skip"] == "0"

    def test_maps_records_to_users(self) -> None:
        users = make_directory(lambda request: httpx.Response(200, json=LISTING)).list_users()

        assert [user.id for user in users] == [1, 2]
        emily = users[0]
        assert emily.first_name == "Emily"
        assert emily.last_name == "Johnson"
        assert emily.gender == "female"
        assert emily.email == "emily.johnson@x.dummyjson.com"
        assert emily.profile_image == "https://dummyjson.com/icon/emilys/128"

    def test_missing_image_uses_placeholder(self) -> None:
        users = make_directory(lambda request: httpx.Response(200, json=LISTING)).list_users()
        assert users[1].profile_image == DEFAULT_PROFILE_IMAGE

    def test_custom_placeholder(self) -> None:
        directory = make_directory(
            lambda request: httpx.Response(200, json=LISTING),
            placeholder_image="https://img.test/none.png",
        )
        assert directory.list_users()[1].profile_image == "https://img.test/none.png"

    @pytest.mark.parametrize("payload", [{}, {"users": None}, {"users": []}])
    def test_missing_users_key_yields_empty_list(self, payload: dict) -> None:
        directory = make_directory(lambda request: httpx.Response(200, json=payload))
        assert directory.list_users() == []

    def test_server_error_raises_data_source_error(self) -> None:
        directory = make_directory(lambda request: httpx.Response(500, json={"message": "boom"}))
        with pytest.raises(DataSourceError):
            directory.list_users()

    def test_transport_error_raises_data_source_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DataSourceError):
            make_directory(handler).list_users()

    def test_non_json_body_raises_data_source_error(self) -> None:
        directory = make_directory(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(DataSourceError):
            directory.list_users()

    def test_malformed_listing_raises_data_source_error(self) -> None:
        directory = make_directory(lambda request: httpx.Response(200, json={"users": "nope"}))
        with pytest.raises(DataSourceError):
            directory.list_users()

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        directory = make_directory(lambda request: httpx.Response(503))
        with caplog.at_level(logging.WARNING), pytest.raises(DataSourceError):
            directory.list_users()
        assert "GET /users failed" in caplog.text


class TestAddUser:
    """Tests for POST /users/add."""

    @pytest.fixture
    def draft(self) -> RegistrationDraft:
        return RegistrationDraft(
            first_name="Ann",
            last_name="Lee",
            gender=Gender.FEMALE,
            email="ann@lee.io",
            phone="+91-9876543210",
            profile_image_ref="local-image:abc",
        )

    def test_posts_camel_case_body(self, draft: RegistrationDraft) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": 209, **json.loads(request.content)})

        make_directory(handler).add_user(draft)

        assert seen[0].method == "POST"
        assert seen[0].url.path == "/users/add"
        assert json.loads(seen[0].content) == {
            "firstName": "Ann",
            "lastName": "Lee",
            "gender": "Female",
            "email": "ann@lee.io",
            "phone": "+91-9876543210",
            "profileImage": "local-image:abc",
        }

    def test_returns_echoed_record(self, draft: RegistrationDraft) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json={"id": 209, **json.loads(request.content)})

        user = make_directory(handler).add_user(draft)

        assert user.id == 209
        assert user.first_name == "Ann"
        assert user.gender == "Female"
        assert user.profile_image == "local-image:abc"

    def test_draft_without_image_gets_placeholder(self, draft: RegistrationDraft) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json={"id": 209, **json.loads(request.content)})

        user = make_directory(handler).add_user(
            replace(draft, profile_image_ref=None)
        )

        assert user.profile_image == DEFAULT_PROFILE_IMAGE

    def test_rejection_raises_data_source_error(self, draft: RegistrationDraft) -> None:
        directory = make_directory(lambda request: httpx.Response(400, json={"message": "bad"}))
        with pytest.raises(DataSourceError):
            directory.add_user(draft)


class TestBuildHttpClient:
    """Tests for the httpx client factory."""

    def test_client_uses_base_url_and_timeout(self) -> None:
        client = build_http_client("https://dummyjson.test", timeout=3.0)
        try:
            assert client.base_url.host == "dummyjson.test"
            assert client.timeout.read == 3.0
        finally:
            client.close()
