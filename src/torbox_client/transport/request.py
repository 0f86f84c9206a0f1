"""Outbound request construction"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel

from torbox_client.errors import BuildError

BODY_TYPE_PARAM = 'bodyType'
CONTENT_TYPE_PARAM = 'Content-Type'
TOKEN_PARAM = 'token'

JSON_CONTENT_TYPE = 'application/json'
FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'

QueryValue = str | int | float | bool | None


class BodyType(StrEnum):
    """Local hint selecting how a request body is encoded, never sent"""

    JSON = 'json'
    FORM = 'form'
    FILE = 'file'


@dataclass(frozen=True)
class OutboundRequest:
    """Request description handed to RequestBuilder.build"""

    method: str
    path: str
    params: Mapping[str, QueryValue] | None = None
    body: Any = None
    body_type: BodyType = BodyType.JSON
    content_type: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


def _query_value(value: QueryValue) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return '' if value is None else str(value)


def encode_form(fields: Mapping[str, QueryValue]) -> bytes:
    """URL-encode form fields, skipping unset values"""
    pairs = [(key, _query_value(value)) for key, value in fields.items() if value is not None]
    return urlencode(pairs).encode()


def encode_multipart(
    fields: Mapping[str, QueryValue] | None = None,
    files: Mapping[str, tuple[str, bytes]] | None = None,
) -> tuple[bytes, str]:
    """Encode fields and files as multipart/form-data

    Returns the body and the content type carrying the generated boundary.
    """
    # (None, value) parts render as plain fields without a filename
    parts: dict[str, tuple[str | None, str | bytes]] = {
        key: (None, _query_value(value)) for key, value in (fields or {}).items() if value is not None
    }
    for name, (filename, content) in (files or {}).items():
        parts[name] = (filename, content)
    if not parts:
        raise BuildError('multipart body needs at least one field or file')

    request = httpx.Request('POST', 'http://localhost', files=parts)
    return request.read(), request.headers['Content-Type']


class RequestBuilder:
    """Build httpx requests against one service root

    The body type hint picks the encoding:

    - json: the body is serialized to JSON
    - form: the body is already URL-encoded bytes
    - file: the body is already encoded bytes (e.g. multipart) and the
      content type must be supplied by the caller
    """

    def __init__(self, base_url: str, token: str | None = None):
        self.base_url = base_url.rstrip('/')
        self.token = token

    def url_for(self, path: str) -> str:
        return f'{self.base_url}/{path.lstrip("/")}'

    def build(
        self,
        method: str,
        path: str,
        params: Mapping[str, QueryValue] | None = None,
        body: Any = None,
        *,
        body_type: BodyType | str | None = None,
        content_type: str | None = None,
    ) -> httpx.Request:
        query = dict(params or {})

        # Hints are accepted in the query set too but must never reach the wire
        hinted_type = query.pop(BODY_TYPE_PARAM, None)
        hinted_content_type = query.pop(CONTENT_TYPE_PARAM, None)
        body_type = body_type or hinted_type or BodyType.JSON
        content_type = content_type or (str(hinted_content_type) if hinted_content_type else None)

        headers = {'Accept': JSON_CONTENT_TYPE}
        content: bytes | None = None
        if body is not None:
            content, headers['Content-Type'] = self._encode_body(body, str(body_type), content_type)

        if TOKEN_PARAM in query:
            query[TOKEN_PARAM] = self.token

        encoded_params = {key: _query_value(value) for key, value in query.items()}
        return httpx.Request(
            method.upper(),
            self.url_for(path),
            params=encoded_params or None,
            content=content,
            headers=headers,
        )

    def build_from(self, request: OutboundRequest) -> httpx.Request:
        built = self.build(
            request.method,
            request.path,
            request.params,
            request.body,
            body_type=request.body_type,
            content_type=request.content_type,
        )
        built.headers.update(request.headers)
        return built

    @staticmethod
    def _encode_body(body: Any, body_type: str, content_type: str | None) -> tuple[bytes, str]:
        if body_type == BodyType.JSON:
            return _encode_json(body), JSON_CONTENT_TYPE

        if body_type == BodyType.FORM:
            if not isinstance(body, bytes | bytearray):
                raise BuildError(f'expected bytes for form body type, got {type(body).__name__}')
            return bytes(body), FORM_CONTENT_TYPE

        if body_type == BodyType.FILE:
            if not isinstance(body, bytes | bytearray):
                raise BuildError(f'expected bytes for file body type, got {type(body).__name__}')
            if not content_type:
                raise BuildError('file body type requires an explicit content type')
            return bytes(body), content_type

        raise BuildError(f'unknown body type: {body_type}')


def _encode_json(body: Any) -> bytes:
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_none=True).encode()
    try:
        return json.dumps(body).encode()
    except (TypeError, ValueError) as e:
        raise BuildError(f'body is not JSON serializable: {e}') from e
