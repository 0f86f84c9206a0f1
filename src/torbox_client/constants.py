"""TorBox API endpoints and enumerations"""

from enum import IntEnum, StrEnum

API_GENERAL_BASE_URL = 'https://api.torbox.app/v1'
API_SEARCH_BASE_URL = 'https://search-api.torbox.app'

# General API
PATH_TORRENTS_GET_ACTIVE = 'api/torrents/mylist'
PATH_TORRENTS_GET_DOWNLOAD_URL = 'api/torrents/requestdl'
PATH_TORRENTS_CREATE = 'api/torrents/createtorrent'
PATH_TORRENTS_CONTROL_ACTIVE = 'api/torrents/controltorrent'
PATH_TORRENTS_CHECK_CACHED = 'api/torrents/checkcached'
PATH_TORRENTS_INFO = 'api/torrents/torrentinfo'
PATH_TORRENTS_EXPORT_DATA = 'api/torrents/exportdata'
PATH_TORRENTS_SEARCH = 'api/torrents/search'
PATH_TORRENTS_STORE_SEARCH = 'api/torrents/storesearch'

PATH_TORRENTS_GET_QUEUED = 'api/queued/getqueued'
PATH_TORRENTS_CONTROL_QUEUED = 'api/queued/controlqueued'

PATH_USENET_CREATE = 'api/usenet/createusenetdownload'
PATH_USENET_CONTROL = 'api/usenet/controlusenetdownload'
PATH_USENET_GET_DOWNLOAD = 'api/usenet/requestdl'
PATH_USENET_GET_LIST = 'api/usenet/mylist'
PATH_USENET_CHECK_CACHED = 'api/usenet/checkcached'

PATH_WEBDL_CREATE = 'api/webdl/createwebdownload'
PATH_WEBDL_CONTROL = 'api/webdl/controlwebdownload'

PATH_USER_ME = 'api/user/me'
PATH_USER_REFRESH_TOKEN = 'api/user/refreshtoken'
PATH_USER_ADD_REFERRAL = 'api/user/addreferral'

PATH_NOTIFICATIONS_RSS = 'api/notifications/rss'
PATH_NOTIFICATIONS_LIST = 'api/notifications/mynotifications'
PATH_NOTIFICATIONS_CLEAR = 'api/notifications/clear'

PATH_RSS_ADD = 'api/rss/addrss'
PATH_RSS_CONTROL = 'api/rss/controlrss'
PATH_RSS_MODIFY = 'api/rss/modifyrss'

PATH_INTEGRATION_GOOGLEDRIVE = 'api/integration/googledrive'
PATH_INTEGRATION_DROPBOX = 'api/integration/dropbox'
PATH_INTEGRATION_ONEDRIVE = 'api/integration/onedrive'
PATH_INTEGRATION_GOFILE = 'api/integration/gofile'
PATH_INTEGRATION_1FICHIER = 'api/integration/1fichier'
PATH_INTEGRATION_JOBS = 'api/integration/jobs'

PATH_STATS = 'api/stats'

# Search API
PATH_SEARCH_TORRENTS = 'torrents'
PATH_SEARCH_META = 'meta'

BITTORRENT_INFO_HASH_PREFIX = 'urn:btih:'


class SeedSetting(IntEnum):
    """Seeding preference for a newly created torrent"""

    AUTO = 1
    SEED = 2
    NO_SEED = 3


class ControlActiveOperation(StrEnum):
    REANNOUNCE = 'reannounce'
    DELETE = 'delete'
    RESUME = 'resume'
    PAUSE = 'pause'


class ControlQueuedOperation(StrEnum):
    DELETE = 'delete'
    START = 'start'


class ControlUsenetOperation(StrEnum):
    DELETE = 'delete'
    PAUSE = 'pause'
    RESUME = 'resume'


class ControlWebDownloadOperation(StrEnum):
    DELETE = 'delete'


class ControlRSSOperation(StrEnum):
    UPDATE = 'update'
    DELETE = 'delete'
    PAUSE = 'pause'
    RESUME = 'resume'


class TorrentState(StrEnum):
    """Download states reported by the service"""

    # processing
    CHECKING_RESUME_DATA = 'checkingResumeData'
    CHECKING = 'checking'
    META_DL = 'metaDL'
    PAUSED = 'paused'

    # downloading
    DOWNLOADING = 'downloading'
    STALLED_NO_SEEDS = 'stalled (no seeds)'
    STALLED_DL = 'stalledDL'

    # uploading
    UPLOADING = 'uploading'
    UPLOADING_NO_PEERS = 'uploading (no peers)'

    # completion; `completed` does not imply the download finished
    COMPLETED = 'completed'
    CACHED = 'cached'

    UNKNOWN = 'unknown'

    @property
    def is_complete(self) -> bool:
        return self in _COMPLETE_STATES


_COMPLETE_STATES = frozenset(
    {
        TorrentState.COMPLETED,
        TorrentState.CACHED,
        TorrentState.UPLOADING,
        TorrentState.UPLOADING_NO_PEERS,
    }
)
