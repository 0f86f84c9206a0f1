"""TorBox client facade"""

import logging
from types import TracebackType
from typing import Self

import httpx

from .clients.general import GeneralService
from .clients.search import SearchService
from .config import Settings
from .config import settings as default_settings
from .errors import ConfigurationError
from .transport.auth import BearerAuthTransport, default_limits
from .transport.executor import RequestExecutor, SleepFunc
from .transport.request import RequestBuilder

log = logging.getLogger(f'{default_settings.log_prefix}.client')


class TorboxClient:
    """Entry point holding the general and search services

    Both services share one pooled httpx client authenticated with the API
    key. Use as an async context manager or call aclose() when done.
    """

    def __init__(
        self,
        api_key: str,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
        sleep: SleepFunc | None = None,
    ):
        if not api_key:
            raise ConfigurationError('an API key is required')

        self.settings = settings or default_settings
        self._log = logger or log

        auth_transport = BearerAuthTransport(
            api_key,
            transport,
            limits=default_limits(self.settings),
            logger=logger,
        )
        self.http = httpx.AsyncClient(
            transport=auth_transport,
            timeout=httpx.Timeout(self.settings.timeout, connect=self.settings.connect_timeout),
        )

        self.general = GeneralService(
            RequestBuilder(self.settings.general_base_url, api_key),
            RequestExecutor(
                self.http, max_retries=self.settings.max_retries, logger=logger, sleep=sleep, service_name='torbox'
            ),
        )
        self.search = SearchService(
            RequestBuilder(self.settings.search_base_url, api_key),
            RequestExecutor(
                self.http,
                max_retries=self.settings.max_retries,
                logger=logger,
                sleep=sleep,
                service_name='torbox search',
            ),
        )
        self._log.debug('torbox client created for %s', self.settings.general_base_url)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs) -> Self:
        """Create a client from settings, which must carry an API key"""
        settings = settings or default_settings
        if not settings.api_key:
            raise ConfigurationError('TORBOX_API_KEY is not set')
        return cls(settings.api_key, settings=settings, **kwargs)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
