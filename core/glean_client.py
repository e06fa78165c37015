# =============================================================================
# core/glean_client.py  —  Minimal HTTP Client for the Glean REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends one authenticated JSON POST to a Glean endpoint and hands back the
#   status code and raw body.  That's it: no retries, no caching, no timeout
#   beyond urllib's defaults.
#
# NON-2xx RESPONSES:
#   urllib raises HTTPError for 4xx/5xx.  We catch it and return the status and
#   body like any other response, so the dispatch handler decides what a
#   failure means for each tool (search passes the body through, chat flags
#   an error).  Network-level failures (DNS, refused connection ...) are NOT
#   caught here; they propagate to the caller.
#
# TESTING:
#   The urlopen function is injected, so tests can swap in a fake without
#   touching the network.
# =============================================================================

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Callable

from core.config import GleanConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body as JSON (raises json.JSONDecodeError on bad input)."""
        return json.loads(self.text)


class GleanClient:
    def __init__(
        self,
        config: GleanConfig,
        urlopen: Callable[..., Any] = urllib.request.urlopen,
    ):
        self._config = config
        self._urlopen = urlopen

    def build_request(self, endpoint: str, payload: dict) -> urllib.request.Request:
        url = f"{self._config.base_url}/{endpoint.lstrip('/')}"
        return urllib.request.Request(
            url,
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._config.api_key}",
            },
            method="POST",
        )

    def post(self, endpoint: str, payload: dict) -> HttpResponse:
        """POST ``payload`` as JSON to ``{base_url}/{endpoint}``."""
        req = self.build_request(endpoint, payload)
        logger.debug("POST %s", req.full_url)

        try:
            with self._urlopen(req) as response:
                return HttpResponse(status=response.status, body=response.read())
        except urllib.error.HTTPError as e:
            body = e.read() or b""
            logger.debug("POST %s -> HTTP %s", req.full_url, e.code)
            return HttpResponse(status=e.code, body=body)
