"""Bearer token transport"""

import logging

import httpx

from torbox_client.config import Settings, settings

log = logging.getLogger(f'{settings.log_prefix}.transport')


def default_limits(config: Settings | None = None) -> httpx.Limits:
    """Connection pool limits for the shared client"""
    config = config or settings
    return httpx.Limits(
        max_connections=config.max_connections,
        max_keepalive_connections=config.max_keepalive_connections,
        keepalive_expiry=config.keepalive_expiry,
    )


class BearerAuthTransport(httpx.AsyncBaseTransport):
    """Transport wrapper adding `Authorization: Bearer <key>` to every request"""

    def __init__(
        self,
        api_key: str,
        transport: httpx.AsyncBaseTransport | None = None,
        *,
        limits: httpx.Limits | None = None,
        logger: logging.Logger | None = None,
    ):
        self._api_key = api_key
        self._transport = transport or httpx.AsyncHTTPTransport(limits=limits or default_limits())
        self._log = logger or log

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        # Set rather than append so retried requests carry a single header
        request.headers['Authorization'] = f'Bearer {self._api_key}'
        self._log.debug('%s %s', request.method, request.url.copy_remove_param('token'))
        return await self._transport.handle_async_request(request)

    async def aclose(self) -> None:
        await self._transport.aclose()
