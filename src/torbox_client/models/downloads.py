"""Usenet and web download payloads"""

from pydantic import Field

from .common import TorboxModel
from .torrent import File


class UsenetDownload(TorboxModel):
    id: int = 0
    hash: str = ''
    name: str = ''
    size: int = 0
    download_state: str = ''
    download_speed: float = 0.0
    upload_speed: float = 0.0
    downloaded: int = 0
    progress: float = 0.0
    ratio: float = 0.0
    created_at: str = ''
    updated_at: str = ''
    files: list[File] = Field(default_factory=list)


class WebDownload(TorboxModel):
    id: int = 0
    hash: str = ''
    name: str = ''
    size: int = 0
    download_state: str = ''
    download_speed: float = 0.0
    downloaded: int = 0
    progress: float = 0.0
    created_at: str = ''
    updated_at: str = ''
    files: list[File] = Field(default_factory=list)
