"""
HTTP client for the EpiGraphDB API.

Wraps a single httpx.Client. Transient failures (connection errors, HTTP 5xx)
are retried with tenacity; client errors (HTTP 4xx) fail immediately.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
import polars as pl
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential

from egdb.config import settings
from egdb.errors import APIRequestError, APIResponseError

logger = logging.getLogger(__name__)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


class EpiGraphDBClient:
    """
    Client for the EpiGraphDB REST API.

    Usage:
        with EpiGraphDBClient() as client:
            rows = client.post_results("/protein/in-pathway", {"uniprot_id_list": ["P04637"]})
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        retries: int | None = None,
        backoff: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout or settings.api_timeout
        self.retries = retries or settings.api_retries
        self.backoff = backoff
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> EpiGraphDBClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Raw requests
    # ------------------------------------------------------------------

    def _send(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s%s", method, self.base_url, endpoint)
        response = self._client.request(method, endpoint, **kwargs)
        response.raise_for_status()
        return response

    def request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """
        Send a request and decode the JSON body.

        Args:
            method: HTTP method
            endpoint: Path relative to the API root (e.g. "/mr")
            **kwargs: Passed to httpx (params, json, ...)

        Returns:
            Decoded JSON

        Raises:
            APIRequestError: Request failed (after retries for transient errors)
            APIResponseError: Body is not JSON
        """
        retryer = Retrying(
            stop=stop_after_attempt(self.retries),
            wait=wait_exponential(multiplier=self.backoff, max=30),
            retry=retry_if_exception(_is_transient),
            reraise=True,
        )
        try:
            response = retryer(self._send, method, endpoint, **kwargs)
        except httpx.HTTPStatusError as exc:
            raise APIRequestError(
                endpoint,
                exc.response.text[:200] or exc.response.reason_phrase,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.TransportError as exc:
            raise APIRequestError(endpoint, str(exc) or type(exc).__name__) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise APIResponseError(f"{endpoint}: response is not valid JSON") from exc

    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", endpoint, params=_drop_none(params))

    def post(self, endpoint: str, payload: dict[str, Any]) -> Any:
        return self.request("POST", endpoint, json=payload)

    # ------------------------------------------------------------------
    # Result extraction
    # ------------------------------------------------------------------

    def get_results(self, endpoint: str, params: dict[str, Any] | None = None) -> list[dict]:
        """GET an endpoint and return its ``results`` rows."""
        return extract_results(endpoint, self.get(endpoint, params))

    def post_results(self, endpoint: str, payload: dict[str, Any]) -> list[dict]:
        """POST to an endpoint and return its ``results`` rows."""
        return extract_results(endpoint, self.post(endpoint, payload))


def _drop_none(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if params is None:
        return None
    return {k: v for k, v in params.items() if v is not None}


def extract_results(endpoint: str, body: Any) -> list[dict]:
    """
    Pull the ``results`` list out of a response body.

    EpiGraphDB responses look like {"metadata": {...}, "results": [...]}.

    Raises:
        APIResponseError: Body lacks a results list
    """
    if not isinstance(body, dict) or not isinstance(body.get("results"), list):
        raise APIResponseError(f"{endpoint}: response has no 'results' list")
    rows = body["results"]
    logger.debug("%s returned %d rows", endpoint, len(rows))
    return rows


def results_frame(rows: list[dict]) -> pl.DataFrame:
    """Flatten nested result rows into a DataFrame (nested keys joined with '.')."""
    if not rows:
        return pl.DataFrame()
    return pl.json_normalize(rows, separator=".")
