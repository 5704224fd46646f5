"""Single-shot JSON client for rate-limited hosting APIs, using httpx."""

import json
import threading

import httpx
from pydantic import TypeAdapter, ValidationError

from .errors import DecodeError, RateLimitedError, ServerError, UnexpectedStatusError

DEFAULT_TIMEOUT = 30.0


class ApiClient:
    """Performs one GET per call and classifies the outcome.

    Retries and backoff belong to the caller; the raised error type tells
    it which policy to apply.
    """

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT, transport: httpx.BaseTransport | None = None):
        self._client = httpx.Client(
            headers={"Accept": "application/vnd.github+json"},
            timeout=timeout,
            transport=transport,
        )

    def fetch(self, url: str, auth: str | None = None, target=None):
        """GET url and decode the JSON body.

        Args:
            url: Absolute URL to fetch.
            auth: Authorization header value, omitted when empty.
            target: Type to validate the body into (dataclass, list[...], ...).
                None returns the decoded JSON unchanged.

        Raises:
            RateLimitedError: HTTP 429.
            ServerError: HTTP 500.
            UnexpectedStatusError: any other non-200 status.
            DecodeError: 200 with a body that does not decode into target.
            httpx.TransportError: the request never completed.
        """
        headers = {"Authorization": auth} if auth else None
        resp = self._client.get(url, headers=headers)

        if resp.status_code == 429:
            raise RateLimitedError(url, retry_after=_parse_retry_after(resp))
        if resp.status_code == 500:
            raise ServerError(url)
        if resp.status_code != 200:
            raise UnexpectedStatusError(url, f"{resp.status_code} {resp.reason_phrase}".strip())

        return decode_body(url, resp.content, target)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def decode_body(url: str, content: bytes, target=None):
    if target is None:
        try:
            return json.loads(content)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"invalid JSON: {e}", url) from e
    try:
        return TypeAdapter(target).validate_json(content)
    except ValidationError as e:
        raise DecodeError(f"could not decode into {target!r}: {e}", url) from e


def _parse_retry_after(resp: httpx.Response) -> float | None:
    val = resp.headers.get("retry-after")
    if val is None:
        return None
    try:
        return float(val)
    except ValueError:
        return None


# Shared client, created on first use
_api_client: ApiClient | None = None
_api_client_lock = threading.Lock()


def get_api_client() -> ApiClient:
    global _api_client
    with _api_client_lock:
        if _api_client is None:
            from .settings import get_settings

            _api_client = ApiClient(timeout=get_settings().api_timeout)
        return _api_client


def fetch_url_as(url: str, auth: str | None = None, target=None):
    """fetch() on the shared client."""
    return get_api_client().fetch(url, auth=auth, target=target)
