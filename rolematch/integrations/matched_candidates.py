"""Client for the matched-candidates endpoint (normally reached via the proxy)."""

import asyncio
import json
import os
import threading
import time
from typing import Any

import requests

from ..core.errors import (
    FetchTimeoutError,
    HTTPStatusError,
    MalformedResponseError,
    MissingParameterError,
    UnknownNetworkError,
)
from ..core.models.view_model import ViewModel
from ..core.normalizer import normalize
from ..observability.logger import get_logger
from .mock_data import build_mock_response

logger = get_logger(__name__)

DEFAULT_ENDPOINT = "http://localhost:5000/api/getMatchedCandidates"
DEFAULT_PARAM = "roleId"
DEFAULT_TIMEOUT_SECONDS = 10.0
CHUNK_SIZE = 8192


class MatchedCandidatesClient:
    """Single-attempt fetcher for a role's matched candidates and recruiters.

    The blocking ``requests`` call runs on a daemon thread under an asyncio
    deadline. When the deadline passes the caller gets ``FetchTimeoutError``
    straight away and the streamed response is closed. The worker stops
    reading at its next chunk; nothing joins it, so a server that keeps
    trickling bytes cannot hold up the caller or interpreter exit. A worker
    still waiting for response headers ends at the transport's own read
    timeout.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        param: str = DEFAULT_PARAM,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
        mock: bool = False,
    ):
        """Initialize the client.

        Args:
            endpoint: URL of the proxy (or upstream) endpoint
            param: Query parameter carrying the role identifier
            timeout: Deadline in seconds for the whole request
            session: Optional requests session (mainly for tests)
            mock: Serve the built-in sample payload instead of calling out
        """
        self.endpoint = endpoint
        self.param = param
        self.timeout = float(timeout)
        self.session = session or requests.Session()
        self.test_mode = mock or bool(os.getenv("ROLEMATCH_TEST_MODE"))

    @classmethod
    def from_config(cls, config: dict[str, Any], **kwargs: Any) -> "MatchedCandidatesClient":
        fetcher = config.get("fetcher", {})
        return cls(
            endpoint=fetcher.get("endpoint", DEFAULT_ENDPOINT),
            param=fetcher.get("param", DEFAULT_PARAM),
            timeout=fetcher.get("timeout", DEFAULT_TIMEOUT_SECONDS),
            **kwargs,
        )

    async def fetch(self, role_id: str) -> ViewModel:
        """Fetch and normalize the matched candidates for ``role_id``.

        Raises:
            MissingParameterError: If ``role_id`` is empty
            FetchTimeoutError: If the deadline passed
            HTTPStatusError: On a non-success status
            UnknownNetworkError: On any other transport failure
            MalformedResponseError: If the body is not a usable JSON object
        """
        raw = await self.fetch_raw(role_id)
        return normalize(raw, role_id=role_id)

    async def fetch_raw(self, role_id: str) -> Any:
        """Fetch the decoded JSON body for ``role_id`` (see ``fetch`` for errors)."""
        if not role_id:
            raise MissingParameterError("Missing role identifier")

        if self.test_mode:
            logger.info("fetch_mock_payload", role_id=role_id)
            return build_mock_response()

        logger.info("fetch_start", role_id=role_id, endpoint=self.endpoint, timeout=self.timeout)
        loop = asyncio.get_running_loop()
        outcome: asyncio.Future = loop.create_future()
        inflight: dict[str, requests.Response] = {}

        def settle(result: Any, error: Exception | None) -> None:
            if outcome.done():
                return
            if error is not None:
                outcome.set_exception(error)
            else:
                outcome.set_result(result)

        def worker() -> None:
            try:
                result, error = self._get(role_id, inflight), None
            except Exception as e:
                result, error = None, e
            try:
                loop.call_soon_threadsafe(settle, result, error)
            except RuntimeError:
                # Event loop already closed; nobody is waiting any more
                pass

        # Daemon thread: nothing joins it, so a stalled read cannot hold up the caller or exit
        threading.Thread(target=worker, name=f"fetch-{role_id}", daemon=True).start()

        try:
            body = await asyncio.wait_for(outcome, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("fetch_timeout", role_id=role_id, timeout=self.timeout)
            response = inflight.get("response")
            if response is not None:
                response.close()
            raise FetchTimeoutError(self.timeout) from None

        logger.info("fetch_complete", role_id=role_id)
        return body

    def _get(self, role_id: str, inflight: dict[str, requests.Response]) -> Any:
        """Blocking request, run on the worker thread.

        The response is streamed and published in ``inflight`` so the deadline
        path can close it. The body is read in chunks against the same deadline.
        """
        deadline = time.monotonic() + self.timeout
        try:
            response = self.session.get(
                self.endpoint,
                params={self.param: role_id},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                stream=True,
            )
        except requests.Timeout as e:
            raise FetchTimeoutError(self.timeout) from e
        except requests.RequestException as e:
            logger.error("fetch_failed", role_id=role_id, error=str(e))
            raise UnknownNetworkError(str(e)) from e

        inflight["response"] = response
        try:
            if not response.ok:
                logger.error("fetch_http_error", role_id=role_id, status=response.status_code)
                raise HTTPStatusError(response.status_code, response.text)

            chunks = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise FetchTimeoutError(self.timeout)
        except requests.RequestException as e:
            logger.error("fetch_failed", role_id=role_id, error=str(e))
            raise UnknownNetworkError(str(e)) from e
        finally:
            response.close()

        try:
            return json.loads(b"".join(chunks))
        except ValueError as e:
            raise MalformedResponseError("Response body is not valid JSON") from e
