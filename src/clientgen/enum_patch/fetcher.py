"""Blocking HTTP fetcher for enum-listing endpoints, with retry and backoff."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Optional

import httpx

from clientgen.exceptions import NetworkError

logger = logging.getLogger(__name__)

BACKOFF_BASE_SECONDS = 0.5


class EnumValueFetcher:
    """Fetch ``(key, label)`` pairs from enum-listing endpoints.

    Each endpoint is expected to answer with ``{"Data": [{"Key": ..., "Value": ...}]}``
    (lower-case ``key``/``value`` are accepted too). Scalar keys and labels
    are converted to text; items without a key are skipped and a missing
    label becomes ``""``.

    Failed attempts are retried with exponential backoff (0.5 s, 1 s,
    2 s, ...). There is no sleep after the last attempt.

    Args:
        max_retries: Total attempts per URL; values below 1 mean one attempt.
        timeout_ms: Timeout of each attempt in milliseconds.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`.

    Example::

        with EnumValueFetcher(max_retries=3) as fetcher:
            values = fetcher.fetch("https://api.example.com/MainAPI/Enums/GetAllRole")
    """

    def __init__(
        self,
        max_retries: int = 3,
        timeout_ms: int = 10_000,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.attempts = max(max_retries, 1)
        self._timeout = timeout_ms / 1000
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> EnumValueFetcher:
        self._client = httpx.Client(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Fetching
    # ------------------------------------------------------------------ #

    def fetch(self, url: str) -> list[tuple[str, str]]:
        """Fetch the values listed at *url*.

        Raises:
            NetworkError: If every attempt failed; carries the last error.
        """
        assert self._client is not None, "Fetcher not initialised -- use as context manager"

        last_error = "unknown"
        for attempt in range(1, self.attempts + 1):
            try:
                return self._fetch_once(url)
            except (httpx.HTTPError, ValueError) as exc:
                last_error = str(exc) or type(exc).__name__
                if attempt < self.attempts:
                    delay = BACKOFF_BASE_SECONDS * 2 ** (attempt - 1)
                    logger.debug(
                        "Fetching %s failed: %s, retrying in %.1fs (attempt %d/%d)",
                        url, last_error, delay, attempt, self.attempts,
                    )
                    time.sleep(delay)
        raise NetworkError(url, last_error)

    def _fetch_once(self, url: str) -> list[tuple[str, str]]:
        response = self._client.get(url)
        response.raise_for_status()
        payload = response.json()

        data = payload.get("Data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise ValueError("response missing Data array")

        values = []
        for item in data:
            if not isinstance(item, dict):
                continue
            key = _first_present(item, "Key", "key")
            if key is None:
                continue
            label = _first_present(item, "Value", "value")
            values.append((_as_text(key), "" if label is None else _as_text(label)))
        return values


def _first_present(item: dict[str, Any], *names: str) -> Any:
    for name in names:
        if item.get(name) is not None:
            return item[name]
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)
