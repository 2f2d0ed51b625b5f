from __future__ import annotations

import logging
import time

import httpx

from ..models import TimeOffset
from ..totp import get_time
from ..utils import safe_json
from .constants import QUERY_TIME_TIMEOUT, QUERY_TIME_URL
from .exceptions import MalformedResponse, TimeSyncFailed

logger = logging.getLogger(__name__)


class SteamTimeSync:
    """Measure how far the local clock is from Steam's clock.

    Every query is a single round trip with no caching and no retries.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        async_client: httpx.AsyncClient | None = None,
        url: str = QUERY_TIME_URL,
    ) -> None:
        self.client = client
        self.async_client = async_client
        self.url = url

    def query_offset(self) -> TimeOffset:
        start_time = get_time()
        start = time.perf_counter()

        try:
            if self.client is None:
                with httpx.Client(timeout=QUERY_TIME_TIMEOUT) as client:
                    response = self._post(client)
            else:
                response = self._post(self.client)
        except httpx.HTTPError as e:
            raise TimeSyncFailed(name="Query time") from e

        return self._build_time_offset(response, start_time, start)

    async def query_offset_async(self) -> TimeOffset:
        start_time = get_time()
        start = time.perf_counter()

        try:
            if self.async_client is None:
                async with httpx.AsyncClient(timeout=QUERY_TIME_TIMEOUT) as client:
                    response = await self._post_async(client)
            else:
                response = await self._post_async(self.async_client)
        except httpx.HTTPError as e:
            raise TimeSyncFailed(name="Query time") from e

        return self._build_time_offset(response, start_time, start)

    def _post(self, client: httpx.Client) -> httpx.Response:
        return client.post(self.url, headers={"Content-Length": "0"})

    async def _post_async(self, client: httpx.AsyncClient) -> httpx.Response:
        return await client.post(self.url, headers={"Content-Length": "0"})

    def _build_time_offset(
        self,
        response: httpx.Response,
        start_time: int,
        start: float,
    ) -> TimeOffset:
        if not response.is_success:
            raise TimeSyncFailed(
                name="Query time",
                response_status_code=response.status_code,
                response_text=response.text,
            )

        server_time = self._parse_server_time(response)
        latency = max(0, round((time.perf_counter() - start) * 1000))

        logger.debug(f"Received server time: {server_time}")

        return TimeOffset(
            offset=server_time - start_time,
            latency=latency,
        )

    @staticmethod
    def _parse_server_time(response: httpx.Response) -> int:
        body = safe_json(response)
        if not isinstance(body, dict) or not isinstance(body.get("response"), dict):
            raise MalformedResponse(name="Query time", response_text=response.text)

        server_time = body["response"].get("server_time")
        if isinstance(server_time, str) and server_time.isdigit():
            server_time = int(server_time)
        if isinstance(server_time, bool) or not isinstance(server_time, int):
            raise MalformedResponse(name="Query time", response_text=response.text)

        return server_time
