"""General API: torrents, usenet, web downloads, account, RSS and integrations"""

import logging
from typing import Any

from torbox_client.config import settings
from torbox_client.constants import (
    PATH_INTEGRATION_1FICHIER,
    PATH_INTEGRATION_DROPBOX,
    PATH_INTEGRATION_GOFILE,
    PATH_INTEGRATION_GOOGLEDRIVE,
    PATH_INTEGRATION_JOBS,
    PATH_INTEGRATION_ONEDRIVE,
    PATH_NOTIFICATIONS_CLEAR,
    PATH_NOTIFICATIONS_LIST,
    PATH_NOTIFICATIONS_RSS,
    PATH_RSS_ADD,
    PATH_RSS_CONTROL,
    PATH_RSS_MODIFY,
    PATH_STATS,
    PATH_TORRENTS_CHECK_CACHED,
    PATH_TORRENTS_CONTROL_ACTIVE,
    PATH_TORRENTS_CONTROL_QUEUED,
    PATH_TORRENTS_CREATE,
    PATH_TORRENTS_EXPORT_DATA,
    PATH_TORRENTS_GET_ACTIVE,
    PATH_TORRENTS_GET_DOWNLOAD_URL,
    PATH_TORRENTS_GET_QUEUED,
    PATH_TORRENTS_INFO,
    PATH_TORRENTS_SEARCH,
    PATH_TORRENTS_STORE_SEARCH,
    PATH_USENET_CHECK_CACHED,
    PATH_USENET_CONTROL,
    PATH_USENET_CREATE,
    PATH_USENET_GET_DOWNLOAD,
    PATH_USENET_GET_LIST,
    PATH_USER_ADD_REFERRAL,
    PATH_USER_ME,
    PATH_USER_REFRESH_TOKEN,
    PATH_WEBDL_CONTROL,
    PATH_WEBDL_CREATE,
    ControlActiveOperation,
    ControlQueuedOperation,
    ControlRSSOperation,
    ControlUsenetOperation,
    ControlWebDownloadOperation,
)
from torbox_client.errors import TorrentNotFoundError
from torbox_client.models.account import IntegrationJob, Notification, RefreshedToken, RSSFeed, Stats, User
from torbox_client.models.downloads import UsenetDownload, WebDownload
from torbox_client.models.requests import (
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
from torbox_client.models.torrent import CacheCheckResult, CachedItem, QueuedDownload, Torrent
from torbox_client.transport.request import TOKEN_PARAM, BodyType, QueryValue

from .base import BYPASS_CACHE_PARAMS, BaseService

log = logging.getLogger(f'{settings.log_prefix}.general')


def _cache_result(info_hash: str, items: list[CachedItem] | None) -> CacheCheckResult:
    """Reduce a `format=list` cache answer to the entry of one hash"""
    for item in items or []:
        if item.hash.lower() == info_hash.lower():
            return CacheCheckResult(hash=info_hash, cached=True, name=item.name, size=item.size, files=item.files)
    return CacheCheckResult(hash=info_hash, cached=False)


class GeneralService(BaseService):
    """Endpoints of the general API"""

    # Torrents

    async def get_active_torrents(self) -> list[Torrent]:
        data = await self._call(
            'get active torrents', 'GET', PATH_TORRENTS_GET_ACTIVE, list[Torrent], params=BYPASS_CACHE_PARAMS
        )
        return data or []

    async def control_active_torrent(self, torrent_id: int, operation: ControlActiveOperation | str) -> None:
        body = ControlActiveTorrentRequest(torrent_id=torrent_id, operation=ControlActiveOperation(operation))
        await self._call('control active torrent', 'POST', PATH_TORRENTS_CONTROL_ACTIVE, body=body)

    async def get_queued_torrents(self) -> list[QueuedDownload]:
        data = await self._call(
            'get queued torrents', 'GET', PATH_TORRENTS_GET_QUEUED, list[QueuedDownload], params=BYPASS_CACHE_PARAMS
        )
        return data or []

    async def control_queued_torrent(self, queued_id: int, operation: ControlQueuedOperation | str) -> None:
        body = ControlQueuedTorrentRequest(queued_id=queued_id, operation=ControlQueuedOperation(operation))
        await self._call('control queued torrent', 'POST', PATH_TORRENTS_CONTROL_QUEUED, body=body)

    async def control_any_torrent(self, torrent_id: int, operation: str) -> None:
        """Control a torrent without knowing whether it is active or queued

        The active list is checked first, then the queued list. The lookup and
        the control call are separate requests, so the torrent may move between
        buckets in between; callers that know the bucket should use
        control_active_torrent or control_queued_torrent directly.

        Raises:
            ValueError: operation is not valid for the bucket the torrent is in
            TorrentNotFoundError: the id is neither active nor queued
        """
        active = await self.get_active_torrents()
        if any(torrent.id == torrent_id for torrent in active):
            log.debug('torrent %d is active, sending %s', torrent_id, operation)
            await self.control_active_torrent(torrent_id, ControlActiveOperation(operation))
            return

        queued = await self.get_queued_torrents()
        if any(download.id == torrent_id for download in queued):
            log.debug('torrent %d is queued, sending %s', torrent_id, operation)
            await self.control_queued_torrent(torrent_id, ControlQueuedOperation(operation))
            return

        raise TorrentNotFoundError(
            f'torrent with ID {torrent_id} is neither active nor queued', operation='control torrent'
        )

    async def create_torrent(self, request: CreateTorrentRequest) -> Torrent | None:
        """Add a torrent from an attached .torrent file or a magnet link

        A file takes precedence and is uploaded as multipart/form-data.
        """
        if request.file is not None:
            body, content_type = request.to_multipart()
            return await self._call(
                'create torrent',
                'POST',
                PATH_TORRENTS_CREATE,
                Torrent,
                body=body,
                body_type=BodyType.FILE,
                content_type=content_type,
            )

        return await self._call(
            'create torrent', 'POST', PATH_TORRENTS_CREATE, Torrent, body=request.to_form(), body_type=BodyType.FORM
        )

    async def get_download_url(self, torrent_id: int, file_id: int = 0, *, zip_link: bool | None = None) -> str:
        params: dict[str, QueryValue] = {'torrent_id': torrent_id, 'file_id': file_id, TOKEN_PARAM: ''}
        if zip_link is not None:
            params['zip_link'] = zip_link
        data = await self._call('get download URL', 'GET', PATH_TORRENTS_GET_DOWNLOAD_URL, str, params=params)
        return data or ''

    async def check_cached(self, info_hash: str) -> CacheCheckResult:
        data = await self._call(
            'check cached',
            'GET',
            PATH_TORRENTS_CHECK_CACHED,
            list[CachedItem],
            params={'hash': info_hash, 'format': 'list'},
        )
        return _cache_result(info_hash, data)

    async def get_torrent_info(self, info_hash: str) -> Torrent | None:
        return await self._call('get torrent info', 'GET', PATH_TORRENTS_INFO, Torrent, params={'hash': info_hash})

    async def export_data(self, torrent_id: int) -> str:
        """Magnet link of a torrent in the account"""
        data = await self._call(
            'export torrent data',
            'GET',
            PATH_TORRENTS_EXPORT_DATA,
            str,
            params={'torrent_id': torrent_id, 'type': 'magnet'},
        )
        return data or ''

    async def search_torrents(self, query: str) -> list[Torrent]:
        data = await self._call('search torrents', 'GET', PATH_TORRENTS_SEARCH, list[Torrent], params={'query': query})
        return data or []

    async def store_search(self, query: str) -> None:
        await self._call('store search', 'POST', PATH_TORRENTS_STORE_SEARCH, body=StoreSearchRequest(query=query))

    # Usenet

    async def create_usenet_download(self, request: CreateUsenetRequest) -> UsenetDownload | None:
        return await self._call('create usenet download', 'POST', PATH_USENET_CREATE, UsenetDownload, body=request)

    async def get_usenet_list(self) -> list[UsenetDownload]:
        data = await self._call(
            'get usenet list', 'GET', PATH_USENET_GET_LIST, list[UsenetDownload], params=BYPASS_CACHE_PARAMS
        )
        return data or []

    async def control_usenet_download(self, usenet_id: int, operation: ControlUsenetOperation | str) -> None:
        body = ControlUsenetRequest(usenet_id=usenet_id, operation=ControlUsenetOperation(operation))
        await self._call('control usenet download', 'POST', PATH_USENET_CONTROL, body=body)

    async def get_usenet_download_url(self, usenet_id: int, file_id: int = 0) -> str:
        params: dict[str, QueryValue] = {'usenet_id': usenet_id, 'file_id': file_id, TOKEN_PARAM: ''}
        data = await self._call('get usenet download URL', 'GET', PATH_USENET_GET_DOWNLOAD, str, params=params)
        return data or ''

    async def check_usenet_cached(self, info_hash: str) -> CacheCheckResult:
        data = await self._call(
            'check usenet cache',
            'GET',
            PATH_USENET_CHECK_CACHED,
            list[CachedItem],
            params={'hash': info_hash, 'format': 'list'},
        )
        return _cache_result(info_hash, data)

    # Web downloads

    async def create_web_download(self, request: CreateWebDownloadRequest) -> WebDownload | None:
        return await self._call('create web download', 'POST', PATH_WEBDL_CREATE, WebDownload, body=request)

    async def control_web_download(self, web_id: int, operation: ControlWebDownloadOperation | str) -> None:
        body = ControlWebDownloadRequest(web_id=web_id, operation=ControlWebDownloadOperation(operation))
        await self._call('control web download', 'POST', PATH_WEBDL_CONTROL, body=body)

    # User

    async def get_user(self) -> User | None:
        return await self._call('get user', 'GET', PATH_USER_ME, User)

    async def refresh_token(self) -> str:
        """Ask for a new API token; the client keeps using the old one"""
        data: RefreshedToken | None = await self._call(
            'refresh token', 'POST', PATH_USER_REFRESH_TOKEN, RefreshedToken
        )
        return data.token if data else ''

    async def add_referral(self, referral_code: str) -> None:
        body = AddReferralRequest(referral_code=referral_code)
        await self._call('add referral', 'POST', PATH_USER_ADD_REFERRAL, body=body)

    # Notifications

    async def get_rss_notifications(self) -> list[Notification]:
        data = await self._call('get RSS notifications', 'GET', PATH_NOTIFICATIONS_RSS, list[Notification])
        return data or []

    async def get_notifications(self) -> list[Notification]:
        data = await self._call('get notifications', 'GET', PATH_NOTIFICATIONS_LIST, list[Notification])
        return data or []

    async def clear_notifications(self) -> None:
        await self._call('clear notifications', 'POST', PATH_NOTIFICATIONS_CLEAR)

    # RSS

    async def add_rss(self, request: AddRSSRequest) -> RSSFeed | None:
        return await self._call('add RSS', 'POST', PATH_RSS_ADD, RSSFeed, body=request)

    async def control_rss(self, rss_id: int, operation: ControlRSSOperation | str) -> None:
        body = ControlRSSRequest(rss_id=rss_id, operation=ControlRSSOperation(operation))
        await self._call('control RSS', 'POST', PATH_RSS_CONTROL, body=body)

    async def modify_rss(self, request: ModifyRSSRequest) -> RSSFeed | None:
        return await self._call('modify RSS', 'POST', PATH_RSS_MODIFY, RSSFeed, body=request)

    # Integrations

    async def _authorize(self, operation: str, path: str, body: IntegrationAuthRequest) -> None:
        await self._call(operation, 'POST', path, Any, body=body)

    async def authorize_google_drive(self, code: str) -> None:
        await self._authorize('authorize Google Drive', PATH_INTEGRATION_GOOGLEDRIVE, IntegrationAuthRequest(code=code))

    async def authorize_dropbox(self, code: str) -> None:
        await self._authorize('authorize Dropbox', PATH_INTEGRATION_DROPBOX, IntegrationAuthRequest(code=code))

    async def authorize_onedrive(self, code: str) -> None:
        await self._authorize('authorize OneDrive', PATH_INTEGRATION_ONEDRIVE, IntegrationAuthRequest(code=code))

    async def authorize_gofile(self, api_key: str) -> None:
        await self._authorize('authorize Gofile', PATH_INTEGRATION_GOFILE, IntegrationAuthRequest(api_key=api_key))

    async def authorize_onefichier(self, api_key: str) -> None:
        await self._authorize(
            'authorize 1Fichier', PATH_INTEGRATION_1FICHIER, IntegrationAuthRequest(api_key=api_key)
        )

    async def get_integration_jobs(self) -> list[IntegrationJob]:
        data = await self._call('get integration jobs', 'GET', PATH_INTEGRATION_JOBS, list[IntegrationJob])
        return data or []

    # Stats

    async def get_stats(self) -> Stats | None:
        return await self._call('get stats', 'GET', PATH_STATS, Stats)
