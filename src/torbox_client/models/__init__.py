"""Pydantic models of TorBox API payloads"""

from .common import Envelope, TorboxModel, collect_unknown_fields
from .torrent import (
    CacheCheckResult,
    CachedItem,
    File,
    ProgressDetails,
    QueuedDownload,
    Torrent,
    TrackerDetails,
)
from .metadata import Metadata, Title, TorrentSearchResult, Trailer, parse_release_years
from .downloads import UsenetDownload, WebDownload
from .account import IntegrationJob, Notification, RefreshedToken, RSSFeed, Stats, User
from .requests import (
    AddReferralRequest,
    AddRSSRequest,
    ControlActiveTorrentRequest,
    ControlQueuedTorrentRequest,
    ControlRSSRequest,
    ControlUsenetRequest,
    ControlWebDownloadRequest,
    CreateTorrentRequest,
    CreateUsenetRequest,
    CreateWebDownloadRequest,
    IntegrationAuthRequest,
    ModifyRSSRequest,
    StoreSearchRequest,
)

__all__ = [
    'AddRSSRequest',
    'AddReferralRequest',
    'CacheCheckResult',
    'CachedItem',
    'ControlActiveTorrentRequest',
    'ControlQueuedTorrentRequest',
    'ControlRSSRequest',
    'ControlUsenetRequest',
    'ControlWebDownloadRequest',
    'CreateTorrentRequest',
    'CreateUsenetRequest',
    'CreateWebDownloadRequest',
    'Envelope',
    'File',
    'IntegrationAuthRequest',
    'IntegrationJob',
    'Metadata',
    'ModifyRSSRequest',
    'Notification',
    'ProgressDetails',
    'QueuedDownload',
    'RSSFeed',
    'RefreshedToken',
    'Stats',
    'StoreSearchRequest',
    'Title',
    'TorboxModel',
    'Torrent',
    'TorrentSearchResult',
    'TrackerDetails',
    'Trailer',
    'UsenetDownload',
    'User',
    'WebDownload',
    'collect_unknown_fields',
    'parse_release_years',
]
