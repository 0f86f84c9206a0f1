"""Request execution with retries and lenient response decoding

Retry policy:

- up to `max_retries` retries after the first attempt; before retry n the
  executor waits 2**(n-1) seconds (1s, 2s, 4s)
- timeouts, and network errors whose message marks them as transient
  (reset, refused, unreachable, no route to host), are retried; other
  transport errors such as TLS failures or unknown hosts fail immediately
- 429 honours an integer Retry-After header instead of the normal backoff,
  falling back to 2**attempt seconds without one
- 5xx is retried with the normal backoff
- any other error status, or an error status after the last attempt,
  raises APIError built from the envelope error/detail strings
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from torbox_client.config import settings
from torbox_client.errors import APIError, DecodeError, TransportError, format_api_error
from torbox_client.models.common import Envelope, collect_unknown_fields

log = logging.getLogger(f'{settings.log_prefix}.executor')

ModelT = TypeVar('ModelT', bound=BaseModel)
SleepFunc = Callable[[float], Awaitable[Any]]

DEFAULT_MAX_RETRIES = 3

RETRYABLE_ERROR_MARKERS = (
    'connection reset',
    'reset by peer',
    'timeout',
    'timed out',
    'temporary failure',
    'network is unreachable',
    'no route to host',
    'connection refused',
)


def is_retryable_network_error(exc: Exception) -> bool:
    """Check whether a transport failure is worth another attempt"""
    if isinstance(exc, httpx.TimeoutException):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in RETRYABLE_ERROR_MARKERS)


def parse_retry_after(value: str | None) -> int | None:
    """Parse a Retry-After header given in whole seconds"""
    if not value:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def decode_lenient(
    response_type: type[ModelT],
    content: bytes | str,
    logger: logging.Logger | None = None,
    *,
    operation: str | None = None,
) -> ModelT:
    """Decode JSON into a model, warning about fields the model does not know"""
    logger = logger or log
    try:
        payload = json.loads(content)
    except ValueError as e:
        raise DecodeError(f'malformed JSON response: {e}', operation=operation) from e

    try:
        result = response_type.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f'unexpected response shape: {e}', operation=operation) from e

    unknown = collect_unknown_fields(result)
    if unknown:
        logger.warning('unknown fields in torbox response: %s', unknown)
    return result


class RequestExecutor:
    """Send built requests and decode their responses"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        logger: logging.Logger | None = None,
        sleep: SleepFunc | None = None,
        service_name: str = 'torbox',
    ):
        self.client = client
        self.max_retries = max_retries
        self.service_name = service_name
        self._log = logger or log
        self._sleep = sleep or asyncio.sleep

    async def execute(
        self,
        request: httpx.Request,
        response_type: type[ModelT],
        *,
        operation: str | None = None,
    ) -> ModelT | None:
        """Send `request` and decode the body into `response_type`

        Returns None when the response has no body.

        Raises:
            TransportError: connection failure that was not (or no longer) retryable
            APIError: error status after the retry policy gave up
            DecodeError: response body is not valid for `response_type`
        """
        pending_delay: float | None = None

        for attempt in range(self.max_retries + 1):
            if attempt > 0:
                delay = pending_delay if pending_delay is not None else float(2 ** (attempt - 1))
                pending_delay = None
                self._log.debug(
                    'retrying %s API request %s (attempt %d) after %.1fs',
                    self.service_name,
                    operation or request.url.path,
                    attempt,
                    delay,
                )
                await self._sleep(delay)

            try:
                response = await self.client.send(request)
            except httpx.TransportError as e:
                retryable = is_retryable_network_error(e)
                self._log.warning('%s API request failed on attempt %d: %s', self.service_name, attempt, e)
                if retryable and attempt < self.max_retries:
                    continue
                self._log.error(
                    'failed to execute %s request after %d attempt(s): %s', self.service_name, attempt + 1, e
                )
                raise TransportError(str(e) or type(e).__name__, retryable=retryable, operation=operation) from e

            if response.status_code >= 400:
                envelope = self._error_envelope(response)
                self._log.debug(
                    '%s API response error: status=%d error=%r detail=%r attempt=%d',
                    self.service_name,
                    response.status_code,
                    envelope.error,
                    envelope.detail,
                    attempt,
                )
                has_attempts_left = attempt < self.max_retries

                if response.status_code == 429 and has_attempts_left:
                    retry_after = parse_retry_after(response.headers.get('Retry-After'))
                    if retry_after is not None:
                        self._log.warning(
                            'rate limited by %s API, waiting %ds before retry', self.service_name, retry_after
                        )
                        pending_delay = float(retry_after)
                    else:
                        pending_delay = float(2**attempt)
                        self._log.warning(
                            'rate limited by %s API, using exponential backoff of %.0fs',
                            self.service_name,
                            pending_delay,
                        )
                    continue

                if 500 <= response.status_code < 600 and has_attempts_left:
                    self._log.warning(
                        'server error %d from %s API, retrying', response.status_code, self.service_name
                    )
                    continue

                raise APIError(
                    format_api_error(envelope.error, envelope.detail, response.status_code),
                    status_code=response.status_code,
                    error=envelope.error,
                    detail=envelope.detail,
                    operation=operation,
                )

            if not response.content:
                return None
            return decode_lenient(response_type, response.content, self._log, operation=operation)

    def _error_envelope(self, response: httpx.Response) -> Envelope[Any]:
        if not response.content:
            return Envelope[Any]()
        try:
            return Envelope[Any].model_validate(json.loads(response.content))
        except (ValueError, ValidationError):
            return Envelope[Any]()
