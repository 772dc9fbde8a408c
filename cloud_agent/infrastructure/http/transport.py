"""
HTTP transport - performs one bounded, classified exchange with the Cloud Agent service.

Every outcome is returned as a CallResult value; I/O failures never escape as
exceptions. The destination host always comes from the EndpointConfig, callers
only contribute a path.
"""

from __future__ import annotations
import json
import logging
import re
import time
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import urlparse

import requests
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import InvalidHeader, RequestException, Timeout
from urllib3.exceptions import ReadTimeoutError

from ... import __version__
from ...domain.models.call import (
    CallFailure,
    CallRequest,
    CallResult,
    CallSuccess,
    EndpointConfig,
    FailureKind,
)
from .buffer import BoundedBuffer, MAX_RESPONSE_BYTES

logger = logging.getLogger(__name__)

USER_AGENT = f"cloud-agent-mcp/{__version__}"
CHUNK_SIZE = 8192
ERROR_BODY_PREVIEW_CHARS = 300

INSECURE_KEY_MESSAGE = "Refusing to send API key over insecure HTTP. Use HTTPS."
TIMEOUT_MESSAGE = "Request timed out"
OVERSIZED_MESSAGE = "Response too large"
INVALID_KEY_MESSAGE = "Invalid API key format"


def encode_body(body: Any) -> bytes:
    """Compact JSON, no whitespace between tokens."""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def build_headers(credential: Optional[str]) -> Dict[str, str]:
    headers = {
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }
    if credential:
        headers["Authorization"] = f"Bearer {credential}"
    return headers


def _error_field(parsed: Any) -> Optional[str]:
    if not isinstance(parsed, dict):
        return None
    err = parsed.get("error")
    if not err:
        return None
    if isinstance(err, str):
        return err
    return json.dumps(err, ensure_ascii=False)


def classify_response(status: int, raw: bytes) -> CallResult:
    """Turn a complete response body into a success payload or an HTTP failure."""
    text = raw.decode("utf-8", errors="replace")
    try:
        parsed = json.loads(text)
    except ValueError:
        if status >= 400:
            return CallFailure(FailureKind.HTTP_ERROR, f"HTTP {status}: {text[:ERROR_BODY_PREVIEW_CHARS]}")
        return CallSuccess(text)
    if status >= 400:
        return CallFailure(FailureKind.HTTP_ERROR, _error_field(parsed) or f"HTTP {status}")
    return CallSuccess(parsed)


def _one_line(message: str) -> str:
    return re.sub(r"\s+", " ", message).strip()


def _is_read_timeout(exc: RequestsConnectionError) -> bool:
    # iter_content re-raises urllib3 read timeouts as ConnectionError
    return any(isinstance(arg, ReadTimeoutError) for arg in exc.args)


class HttpTransport:
    """Carries CallRequests to the configured endpoint using requests."""

    def __init__(
        self,
        endpoint: EndpointConfig,
        *,
        max_bytes: int = MAX_RESPONSE_BYTES,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.endpoint = endpoint
        self.max_bytes = max_bytes
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)

    def url_for(self, path: str) -> str:
        return f"{self.endpoint.base_url}{path}"

    def send(self, call: CallRequest) -> CallResult:
        url = self.url_for(call.path)
        scheme = urlparse(url).scheme.lower()

        # Checked before any session or socket exists
        if self.endpoint.has_credential and scheme != "https":
            self._logger.warning("Refused %s %s: API key configured for a non-HTTPS endpoint", call.method, call.path)
            return CallFailure(FailureKind.SECURITY, INSECURE_KEY_MESSAGE)

        headers = build_headers(self.endpoint.credential)
        data = encode_body(call.body) if call.body is not None else None
        deadline = self._clock() + call.timeout_s
        start = time.perf_counter()
        status: Any = "NA"
        try:
            result, status = self._exchange(call, url, headers, data, deadline)
        except InvalidHeader:
            # requests echoes the offending header value, bearer key included
            result = CallFailure(FailureKind.NETWORK_ERROR, INVALID_KEY_MESSAGE)
        except Timeout:
            result = CallFailure(FailureKind.TIMEOUT, TIMEOUT_MESSAGE)
        except RequestsConnectionError as e:
            if _is_read_timeout(e):
                result = CallFailure(FailureKind.TIMEOUT, TIMEOUT_MESSAGE)
            else:
                result = CallFailure(FailureKind.NETWORK_ERROR, _one_line(str(e)) or "Network error")
        except RequestException as e:
            result = CallFailure(FailureKind.NETWORK_ERROR, _one_line(str(e)) or "Network error")

        dur_ms = (time.perf_counter() - start) * 1000.0
        if isinstance(result, CallFailure):
            self._logger.warning("%s %s -> %s (%s) in %.1fms", call.method, call.path, status, result.kind.value, dur_ms)
        else:
            self._logger.info("%s %s -> %s in %.1fms", call.method, call.path, status, dur_ms)
        return result

    def _exchange(
        self,
        call: CallRequest,
        url: str,
        headers: Dict[str, str],
        data: Optional[bytes],
        deadline: float,
    ) -> Tuple[CallResult, Any]:
        with requests.Session() as session:
            resp = session.request(
                method=call.method,
                url=url,
                headers=headers,
                data=data,
                timeout=(call.timeout_s, call.timeout_s),
                stream=True,
                allow_redirects=False,
            )
            status = resp.status_code
            try:
                buf = BoundedBuffer(self.max_bytes)
                if self._clock() > deadline:
                    return CallFailure(FailureKind.TIMEOUT, TIMEOUT_MESSAGE), status
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if self._clock() > deadline:
                        return CallFailure(FailureKind.TIMEOUT, TIMEOUT_MESSAGE), status
                    if not buf.append(chunk):
                        self._logger.debug("Aborting %s %s after %d bytes", call.method, call.path, buf.size)
                        return CallFailure(FailureKind.OVERSIZED_RESPONSE, OVERSIZED_MESSAGE), status
                return classify_response(status, buf.finalize()), status
            finally:
                resp.close()
