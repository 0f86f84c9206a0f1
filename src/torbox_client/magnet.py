"""Magnet URI parsing"""

from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel, Field

from .constants import BITTORRENT_INFO_HASH_PREFIX
from .errors import InvalidMagnetLinkError, NotMagnetSchemeError

UNKNOWN_DISPLAY_NAME = 'unknown'


class Magnet(BaseModel):
    """Parsed magnet link"""

    hash: str
    display_name: str = UNKNOWN_DISPLAY_NAME
    trackers: list[str] = Field(default_factory=list)
    url: str = Field(default='', exclude=True)

    def __str__(self) -> str:
        return self.url


def parse_magnet(uri: str) -> Magnet:
    """Parse a magnet URI into its info hash, display name and trackers

    Raises:
        NotMagnetSchemeError: the URI is not a magnet: URI
        InvalidMagnetLinkError: the exact topic (xt) parameter is missing
    """
    parts = urlsplit(uri)
    if parts.scheme.lower() != 'magnet':
        raise NotMagnetSchemeError('invalid magnet link: not a magnet scheme')

    query = parse_qs(parts.query, keep_blank_values=True)

    exact_topic = next((v for v in query.get('xt', []) if v), '')
    if not exact_topic:
        raise InvalidMagnetLinkError('invalid magnet link: missing or malformed xt parameter')

    info_hash = ''
    if exact_topic.startswith(BITTORRENT_INFO_HASH_PREFIX):
        info_hash = exact_topic.removeprefix(BITTORRENT_INFO_HASH_PREFIX)

    display_name = next((v for v in query.get('dn', []) if v), '') or UNKNOWN_DISPLAY_NAME
    trackers = [tr for tr in query.get('tr', []) if tr]

    return Magnet(hash=info_hash, display_name=display_name, trackers=trackers, url=uri)
