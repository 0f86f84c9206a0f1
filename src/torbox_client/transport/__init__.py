"""HTTP transport layer: request building, bearer auth and retrying execution"""

from .request import (
    BodyType,
    OutboundRequest,
    RequestBuilder,
    encode_form,
    encode_multipart,
)
from .auth import BearerAuthTransport, default_limits
from .executor import RequestExecutor, decode_lenient, is_retryable_network_error

__all__ = [
    'BearerAuthTransport',
    'BodyType',
    'OutboundRequest',
    'RequestBuilder',
    'RequestExecutor',
    'decode_lenient',
    'default_limits',
    'encode_form',
    'encode_multipart',
    'is_retryable_network_error',
]
