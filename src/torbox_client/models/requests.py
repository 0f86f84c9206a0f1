"""Request bodies for the general API"""

from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from torbox_client.constants import (
    ControlActiveOperation,
    ControlQueuedOperation,
    ControlRSSOperation,
    ControlUsenetOperation,
    ControlWebDownloadOperation,
    SeedSetting,
)
from torbox_client.magnet import Magnet, parse_magnet
from torbox_client.transport.request import QueryValue, encode_form, encode_multipart

from .common import TorboxModel

TORRENT_UPLOAD_FILENAME = 'torrent.torrent'


class ControlActiveTorrentRequest(TorboxModel):
    torrent_id: int
    operation: ControlActiveOperation


class ControlQueuedTorrentRequest(TorboxModel):
    queued_id: int
    operation: ControlQueuedOperation


class ControlUsenetRequest(TorboxModel):
    usenet_id: int
    operation: ControlUsenetOperation


class ControlWebDownloadRequest(TorboxModel):
    web_id: int
    operation: ControlWebDownloadOperation


class ControlRSSRequest(TorboxModel):
    rss_id: int
    operation: ControlRSSOperation


class CreateTorrentRequest(BaseModel):
    """Torrent creation from a magnet link or a .torrent file

    Sent as multipart/form-data when a file is attached, otherwise as an
    URL-encoded form carrying the magnet URI.
    """

    magnet: Magnet | None = None
    file: bytes | None = None
    seed: SeedSetting | None = None
    allow_zip: bool | None = None
    name: str | None = None
    as_queued: bool | None = None

    @field_validator('magnet', mode='before')
    @classmethod
    def parse_magnet_uri(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_magnet(v)
        return v

    @model_validator(mode='after')
    def require_source(self) -> 'CreateTorrentRequest':
        if self.file is None and self.magnet is None:
            raise ValueError('either a magnet link or a torrent file is required')
        return self

    def _option_fields(self) -> dict[str, QueryValue]:
        return {
            'seed': int(self.seed) if self.seed is not None else None,
            'allow_zip': self.allow_zip,
            'name': self.name,
            'as_queued': self.as_queued,
        }

    def to_form(self) -> bytes:
        """URL-encoded body for magnet submissions"""
        if self.magnet is None:
            raise ValueError('form encoding needs a magnet link')
        return encode_form({'magnet': self.magnet.url, **self._option_fields()})

    def to_multipart(self) -> tuple[bytes, str]:
        """Multipart body and content type for file uploads"""
        if self.file is None:
            raise ValueError('multipart encoding needs a torrent file')
        return encode_multipart(self._option_fields(), {'file': (TORRENT_UPLOAD_FILENAME, self.file)})


class CreateUsenetRequest(TorboxModel):
    link: str
    name: str | None = None
    as_queued: bool | None = None


class CreateWebDownloadRequest(TorboxModel):
    link: str
    name: str | None = None
    as_queued: bool | None = None


class AddReferralRequest(TorboxModel):
    referral_code: str


class AddRSSRequest(TorboxModel):
    url: str
    name: str


class ModifyRSSRequest(TorboxModel):
    rss_id: int
    url: str | None = None
    name: str | None = None
    enabled: bool | None = None


class IntegrationAuthRequest(TorboxModel):
    code: str | None = None
    api_key: str | None = None


class StoreSearchRequest(TorboxModel):
    query: str
