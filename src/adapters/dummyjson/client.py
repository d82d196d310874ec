"""
dummyjson user directory adapter - Implements UserDirectory protocol.

Talks to the public demo API at https://dummyjson.com via httpx. The demo
API does not persist writes: POST /users/add echoes the record back with a
new id, but a later listing will not contain it.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from src.domain.exceptions import DataSourceError
from src.domain.models import DEFAULT_PROFILE_IMAGE, RegistrationDraft, User

from .schemas import NewUserPayload, UserListing, UserRecord

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dummyjson.com"


def build_http_client(base_url: str = DEFAULT_BASE_URL, timeout: float = 10.0) -> httpx.Client:
    """Create the httpx client shared by the adapter for the app lifetime."""
    return httpx.Client(base_url=base_url, timeout=timeout)


class DummyJsonUserDirectory:
    """
    Implements UserDirectory protocol over the dummyjson REST API.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Every transport, HTTP status or payload failure surfaces as
    DataSourceError; no retries are attempted.
    """

    def __init__(
        self,
        client: httpx.Client,
        fetch_limit: int = 30,
        placeholder_image: str = DEFAULT_PROFILE_IMAGE,
    ) -> None:
        """
        Initialize directory with an httpx client.

        Args:
            client: httpx client with base_url pointing at the API root
            fetch_limit: Number of users requested by list_users
            placeholder_image: Image used for records without one
        """
        self._client = client
        self._fetch_limit = fetch_limit
        self._placeholder_image = placeholder_image

    def list_users(self) -> list[User]:
        """Fetch the first fetch_limit users from GET /users."""
        payload = self._request("GET", "/users", params={"limit": self._fetch_limit, "skip": 0})
        try:
            listing = UserListing.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Malformed user listing from data source: %s", exc)
            raise DataSourceError("Malformed user listing") from exc

        return [record.to_user(self._placeholder_image) for record in listing.users or []]

    def add_user(self, draft: RegistrationDraft) -> User:
        """Submit a draft to POST /users/add and return the echoed record."""
        body = NewUserPayload.from_draft(draft).model_dump(by_alias=True)
        payload = self._request("POST", "/users/add", json=body)
        try:
            record = UserRecord.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Malformed user record from data source: %s", exc)
            raise DataSourceError("Malformed user record") from exc

        return record.to_user(self._placeholder_image)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            logger.warning("Data source request %s %s failed: %s", method, path, exc)
            raise DataSourceError(f"{method} {path} failed") from exc
        except ValueError as exc:
            # response.json() on a non-JSON body
            logger.warning("Data source returned non-JSON body for %s %s", method, path)
            raise DataSourceError(f"{method} {path} returned invalid JSON") from exc
