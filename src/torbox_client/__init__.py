"""Asynchronous client for the TorBox API"""

import logging

from .client import TorboxClient
from .config import Settings, settings
from .errors import (
    APIError,
    BuildError,
    ConfigurationError,
    DecodeError,
    InvalidMagnetLinkError,
    NotMagnetSchemeError,
    TorboxError,
    TorrentNotFoundError,
    TransportError,
)
from .magnet import Magnet, parse_magnet

# Silent unless the application configures logging
logging.getLogger(settings.log_prefix).addHandler(logging.NullHandler())

__all__ = [
    'APIError',
    'BuildError',
    'ConfigurationError',
    'DecodeError',
    'InvalidMagnetLinkError',
    'Magnet',
    'NotMagnetSchemeError',
    'Settings',
    'TorboxClient',
    'TorboxError',
    'TorrentNotFoundError',
    'TransportError',
    'parse_magnet',
    'settings',
]
