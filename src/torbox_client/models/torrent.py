"""Torrent payloads"""

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from torbox_client.constants import TorrentState

from .common import TorboxModel

DATE_FIELDS = ('created_at', 'updated_at', 'expires_at')


class File(TorboxModel):
    id: int = 0
    md5: str | None = None
    hash: str = ''
    size: int = 0
    zipped: bool = False
    s3_path: str = ''
    infected: bool = False
    mimetype: str = ''
    absolute_path: str = ''
    name: str = ''
    short_name: str = ''


class TrackerDetails(TorboxModel):
    inactive_check: int = 0
    long_term_seeding: bool = False
    tracker_message: str = ''
    seed_torrent: bool = False
    active: bool = False
    availability: float = 0.0
    ratio: float = 0.0
    tracker: str = ''
    seeds: int = 0
    peers: int = 0
    last_known_seeders: int = 0
    last_known_leechers: int = 0


class ProgressDetails(TorboxModel):
    download_present: bool = False
    download_path: str = ''
    download_finished: bool = False
    total_uploaded: int = 0
    total_downloaded: int = 0
    download_state: str = ''
    progress: float = 0.0
    download_speed: int = 0
    upload_speed: int = 0


class Torrent(TrackerDetails, ProgressDetails):
    """Torrent as returned by the list, create, info and search endpoints

    The identifier arrives as `id`, `torrent_id` or `queued_id`. An explicit
    `torrent_id`/`queued_id` wins over `id`; when both of those are present
    with different values the payload is rejected as ambiguous.
    """

    id: int = 0
    hash: str = ''
    server: int = 0
    auth_id: str = ''
    name: str = ''
    magnet: str = ''
    size: int = 0
    eta: int = 0
    torrent_file: bool = False
    cached: bool = False
    owner: str = ''
    allow_zipped: bool = False
    short_name: str = ''

    created_at: datetime | None = None
    updated_at: datetime | None = None
    expires_at: datetime | None = None

    files: list[File] = Field(default_factory=list)

    @model_validator(mode='before')
    @classmethod
    def normalize_torrent_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        torrent_id = data.pop('torrent_id', None)
        queued_id = data.pop('queued_id', None)
        if torrent_id is not None and queued_id is not None and str(torrent_id) != str(queued_id):
            raise ValueError(f'ambiguous identifier: torrent_id={torrent_id} queued_id={queued_id}')
        explicit_id = torrent_id if torrent_id is not None else queued_id
        if explicit_id is not None:
            data['id'] = explicit_id

        for key in DATE_FIELDS:
            if data.get(key) == '':
                del data[key]

        if 'files' in data and not isinstance(data['files'], list):
            del data['files']
        return data

    @property
    def is_downloaded(self) -> bool:
        return self.download_finished

    @property
    def is_complete(self) -> bool:
        try:
            return TorrentState(self.download_state).is_complete
        except ValueError:
            return False


class QueuedDownload(TorboxModel):
    id: int = 0
    created_at: str = ''
    magnet: str = ''
    torrent_file: str | None = None
    hash: str = ''
    name: str = ''
    type: str = ''


class CachedItem(TorboxModel):
    name: str = ''
    size: int = 0
    hash: str = ''
    files: list[File] = Field(default_factory=list)


class CacheCheckResult(TorboxModel):
    """Cache availability of a single hash"""

    hash: str
    cached: bool = False
    name: str = ''
    size: int = 0
    files: list[File] = Field(default_factory=list)
