"""PostgREST-style HTTP record source.

This module fetches forms and records from the hosted form backend.
Requests use PostgREST query syntax for selection and ordering.
"""

from __future__ import annotations

from typing import Any

import httpx

from core.constants import DEFAULT_TIMEOUT_SECONDS, FORM_ENDPOINT, RECORD_ENDPOINT
from core.errors import FormFilterSourceError
from core.logging_config import get_logger
from core.types import FormRecord, FormSummary
from source.record_payload import (
    expect_object_list,
    form_record_from_payload,
    form_summary_from_payload,
)

_LOGGER = get_logger(__name__)


class RestRecordSource:
    """Record source backed by the form backend REST API."""

    def __init__(
        self,
        base_url: str,
        api_token: str | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create an HTTP source.

        Args:
            base_url: API base URL, e.g. ``https://host/api``.
            api_token: Optional bearer token for the Authorization header.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport, used by tests.
        """
        self._base_url = base_url.rstrip("/")
        self._headers = {"Accept": "application/json"}
        if api_token:
            self._headers["Authorization"] = f"Bearer {api_token}"
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def list_forms(self) -> tuple[FormSummary, ...]:
        """List forms ordered by id.

        Raises:
            FormFilterSourceError: If the request fails.
        """
        payload = self._get_json(FORM_ENDPOINT, {"select": "id,name", "order": "id.asc"})
        rows = expect_object_list(payload, "form listing response")
        return tuple(form_summary_from_payload(row) for row in rows)

    def fetch_records(self, form_id: int | str) -> tuple[FormRecord, ...]:
        """Fetch every record of a form, newest first.

        Args:
            form_id: Form identifier.

        Returns:
            Records in backend order.

        Raises:
            FormFilterSourceError: If the request fails.
        """
        payload = self._get_json(RECORD_ENDPOINT, {"form_id": f"eq.{form_id}", "order": "id.desc"})
        rows = expect_object_list(payload, "record listing response")
        records = tuple(form_record_from_payload(row) for row in rows)
        _LOGGER.info(
            "records_fetched",
            source=self._base_url,
            form_id=form_id,
            record_count=len(records),
        )
        return records

    def _get_json(self, endpoint: str, params: dict[str, str]) -> Any:
        """Issue one GET request and decode its JSON body.

        Raises:
            FormFilterSourceError: On transport, status, or decoding failures.
        """
        url = f"{self._base_url}{endpoint}"
        try:
            with httpx.Client(
                headers=self._headers,
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.get(url, params=params)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as error:
            raise FormFilterSourceError(
                f"Request to {url} failed with status {error.response.status_code}: "
                f"{error.response.text}. Check the API base URL and token."
            ) from error
        except httpx.HTTPError as error:
            raise FormFilterSourceError(
                f"Request to {url} failed: {error}. Check network access and retry."
            ) from error
        except ValueError as error:
            raise FormFilterSourceError(
                f"Response from {url} is not valid JSON: {error}."
            ) from error
