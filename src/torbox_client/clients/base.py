"""Shared plumbing of the general and search services"""

import logging
from collections.abc import Mapping
from typing import Any

from torbox_client.config import settings
from torbox_client.errors import APIError, BuildError, format_api_error
from torbox_client.models.common import Envelope
from torbox_client.transport.executor import RequestExecutor
from torbox_client.transport.request import BodyType, OutboundRequest, QueryValue, RequestBuilder

log = logging.getLogger(f'{settings.log_prefix}.clients')

BYPASS_CACHE_PARAMS: dict[str, QueryValue] = {'bypass_cache': True}


class BaseService:
    """Build, send and unwrap enveloped API calls against one service root"""

    def __init__(self, builder: RequestBuilder, executor: RequestExecutor):
        self.builder = builder
        self.executor = executor

    @property
    def base_url(self) -> str:
        return self.builder.base_url

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        data_type: Any = Any,
        params: Mapping[str, QueryValue] | None = None,
        body: Any = None,
        *,
        body_type: BodyType = BodyType.JSON,
        content_type: str | None = None,
    ) -> Any:
        """Send one request and return the `data` member of its envelope

        Raises APIError when the envelope reports `success: false`.
        """
        outbound = OutboundRequest(
            method=method,
            path=path,
            params=params,
            body=body,
            body_type=body_type,
            content_type=content_type,
        )
        try:
            request = self.builder.build_from(outbound)
        except BuildError as e:
            e.operation = e.operation or operation
            raise

        envelope = await self.executor.execute(request, Envelope[data_type], operation=operation)
        if envelope is None:
            return None

        if envelope.success is False:
            log.debug('%s reported failure: error=%r detail=%r', operation, envelope.error, envelope.detail)
            raise APIError(
                format_api_error(envelope.error, envelope.detail),
                error=envelope.error,
                detail=envelope.detail,
                operation=operation,
            )
        return envelope.data
