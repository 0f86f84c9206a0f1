import json
from urllib.parse import parse_qs

import httpx
import pytest
from conftest import API_KEY, failed, ok

from torbox_client.constants import ControlActiveOperation, SeedSetting
from torbox_client.errors import APIError, BuildError, DecodeError, TorrentNotFoundError
from torbox_client.models.requests import (
    AddRSSRequest,
    CreateTorrentRequest,
    CreateUsenetRequest,
    CreateWebDownloadRequest,
    ModifyRSSRequest,
)
from torbox_client.transport.request import BodyType

V1 = '/v1/api'


def body_of(request: httpx.Request) -> dict:
    return json.loads(request.content)


class TestTorrents:
    @pytest.mark.asyncio
    async def test_get_active_torrents(self, torbox, fake_api, sample_torrent_data):
        fake_api.add_json('GET', f'{V1}/torrents/mylist', ok([sample_torrent_data]))

        torrents = await torbox.general.get_active_torrents()

        assert [torrent.id for torrent in torrents] == [sample_torrent_data['id']]
        request = fake_api.requests[0]
        assert request.url.params['bypass_cache'] == 'true'
        assert request.headers['Authorization'] == f'Bearer {API_KEY}'
        assert request.headers['Accept'] == 'application/json'

    @pytest.mark.asyncio
    async def test_get_active_torrents_empty(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/mylist', ok(None))
        assert await torbox.general.get_active_torrents() == []

    @pytest.mark.asyncio
    async def test_control_active_torrent(self, torbox, fake_api):
        fake_api.add_json('POST', f'{V1}/torrents/controltorrent', ok())

        await torbox.general.control_active_torrent(42, ControlActiveOperation.REANNOUNCE)

        request = fake_api.requests[0]
        assert request.headers['Content-Type'] == 'application/json'
        assert body_of(request) == {'torrent_id': 42, 'operation': 'reannounce'}
        assert 'bodyType' not in request.url.params

    @pytest.mark.asyncio
    async def test_control_active_torrent_rejects_unknown_operation(self, torbox, fake_api):
        with pytest.raises(ValueError):
            await torbox.general.control_active_torrent(1, 'explode')
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_get_queued_torrents(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/queued/getqueued', ok([{'id': 9, 'name': 'queued one', 'hash': 'abc'}]))

        queued = await torbox.general.get_queued_torrents()

        assert queued[0].id == 9
        assert queued[0].name == 'queued one'
        assert fake_api.requests[0].url.params['bypass_cache'] == 'true'

    @pytest.mark.asyncio
    async def test_control_queued_torrent(self, torbox, fake_api):
        fake_api.add_json('POST', f'{V1}/queued/controlqueued', ok())

        await torbox.general.control_queued_torrent(9, 'start')

        assert body_of(fake_api.requests[0]) == {'queued_id': 9, 'operation': 'start'}

    @pytest.mark.asyncio
    async def test_create_torrent_from_magnet(self, torbox, fake_api, sample_magnet, sample_hash):
        fake_api.add_json('POST', f'{V1}/torrents/createtorrent', ok({'torrent_id': 77, 'hash': sample_hash}))

        torrent = await torbox.general.create_torrent(
            CreateTorrentRequest(magnet=sample_magnet, name='Test Movie', as_queued=False)
        )

        assert torrent.id == 77
        request = fake_api.requests[0]
        assert request.headers['Content-Type'] == 'application/x-www-form-urlencoded'
        form = parse_qs(request.content.decode())
        assert form == {'magnet': [sample_magnet], 'name': ['Test Movie'], 'as_queued': ['false']}
        assert dict(request.url.params) == {}

    @pytest.mark.asyncio
    async def test_create_torrent_from_file(self, torbox, fake_api):
        fake_api.add_json('POST', f'{V1}/torrents/createtorrent', ok({'torrent_id': 78, 'name': 'upload'}))

        torrent = await torbox.general.create_torrent(
            CreateTorrentRequest(file=b'd8:announce3:url', seed=SeedSetting.SEED, name='upload')
        )

        assert torrent.id == 78
        request = fake_api.requests[0]
        assert request.headers['Content-Type'].startswith('multipart/form-data; boundary=')
        assert b'name="file"; filename="torrent.torrent"' in request.content
        assert b'd8:announce3:url' in request.content
        assert b'name="seed"' in request.content

    @pytest.mark.asyncio
    async def test_get_download_url_fills_token(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/requestdl', ok('https://dl.torbox.test/file/1'))

        url = await torbox.general.get_download_url(5, 2)

        assert url == 'https://dl.torbox.test/file/1'
        params = fake_api.requests[0].url.params
        assert params['token'] == API_KEY
        assert params['torrent_id'] == '5'
        assert params['file_id'] == '2'

    @pytest.mark.asyncio
    async def test_get_download_url_failure_message(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/requestdl', failed('DOWNLOAD_ERROR', 'File not ready'))

        with pytest.raises(APIError) as exc_info:
            await torbox.general.get_download_url(5, 2)

        assert str(exc_info.value) == 'failed to get download URL: torbox API error: DOWNLOAD_ERROR - File not ready'
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_check_cached(self, torbox, fake_api, sample_hash):
        cached = [{'name': 'Ubuntu ISO', 'size': 4_000_000_000, 'hash': sample_hash, 'files': [{'name': 'u.iso'}]}]
        fake_api.add_json('GET', f'{V1}/torrents/checkcached', ok(cached))

        result = await torbox.general.check_cached(sample_hash)

        assert result.cached is True
        assert result.hash == sample_hash
        assert result.name == 'Ubuntu ISO'
        assert result.files[0].name == 'u.iso'
        params = fake_api.requests[0].url.params
        assert params['hash'] == sample_hash
        assert params['format'] == 'list'

    @pytest.mark.asyncio
    async def test_check_cached_miss(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/checkcached', ok([]))

        result = await torbox.general.check_cached('abc123def456')

        assert result.cached is False
        assert result.hash == 'abc123def456'

    @pytest.mark.asyncio
    async def test_check_cached_ignores_entries_of_other_hashes(self, torbox, fake_api):
        entries = [{'name': 'no hash', 'size': 1}, {'name': 'other', 'hash': 'ffff0000'}]
        fake_api.add_json('GET', f'{V1}/torrents/checkcached', ok(entries))

        result = await torbox.general.check_cached('abc123def456')

        assert result.cached is False
        assert result.name == ''

    @pytest.mark.asyncio
    async def test_get_torrent_info(self, torbox, fake_api, sample_hash):
        fake_api.add_json('GET', f'{V1}/torrents/torrentinfo', ok({'hash': sample_hash, 'name': 'info', 'peers': 3}))

        torrent = await torbox.general.get_torrent_info(sample_hash)

        assert torrent.name == 'info'
        assert torrent.peers == 3
        assert fake_api.requests[0].url.params['hash'] == sample_hash

    @pytest.mark.asyncio
    async def test_export_data(self, torbox, fake_api, sample_magnet):
        fake_api.add_json('GET', f'{V1}/torrents/exportdata', ok(sample_magnet))

        assert await torbox.general.export_data(12) == sample_magnet
        params = fake_api.requests[0].url.params
        assert params['torrent_id'] == '12'
        assert params['type'] == 'magnet'

    @pytest.mark.asyncio
    async def test_search_and_store_search(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/search', ok([{'hash': 'a', 'name': 'ubuntu-24.04'}]))
        fake_api.add_json('POST', f'{V1}/torrents/storesearch', ok())

        results = await torbox.general.search_torrents('ubuntu')
        await torbox.general.store_search('ubuntu')

        assert results[0].name == 'ubuntu-24.04'
        assert fake_api.requests[0].url.params['query'] == 'ubuntu'
        assert body_of(fake_api.requests[1]) == {'query': 'ubuntu'}

    @pytest.mark.asyncio
    async def test_ambiguous_identifier_is_a_decode_error(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/mylist', ok([{'torrent_id': 1, 'queued_id': 2}]))

        with pytest.raises(DecodeError) as exc_info:
            await torbox.general.get_active_torrents()

        assert exc_info.value.operation == 'get active torrents'


class TestControlAnyTorrent:
    @pytest.mark.asyncio
    async def test_active_torrent(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/mylist', ok([{'id': 1}, {'id': 2}]))
        fake_api.add_json('POST', f'{V1}/torrents/controltorrent', ok())

        await torbox.general.control_any_torrent(2, 'pause')

        assert fake_api.requests_to(f'{V1}/queued/getqueued') == []
        assert body_of(fake_api.requests[-1]) == {'torrent_id': 2, 'operation': 'pause'}

    @pytest.mark.asyncio
    async def test_queued_torrent(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/mylist', ok([{'id': 1}]))
        fake_api.add_json('GET', f'{V1}/queued/getqueued', ok([{'id': 5}]))
        fake_api.add_json('POST', f'{V1}/queued/controlqueued', ok())

        await torbox.general.control_any_torrent(5, 'delete')

        assert fake_api.requests[-1].url.path == f'{V1}/queued/controlqueued'
        assert body_of(fake_api.requests[-1]) == {'queued_id': 5, 'operation': 'delete'}

    @pytest.mark.asyncio
    async def test_operation_must_fit_bucket(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/mylist', ok([]))
        fake_api.add_json('GET', f'{V1}/queued/getqueued', ok([{'id': 5}]))

        with pytest.raises(ValueError):
            await torbox.general.control_any_torrent(5, 'reannounce')

        assert fake_api.requests_to(f'{V1}/queued/controlqueued') == []

    @pytest.mark.asyncio
    async def test_unknown_torrent(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/torrents/mylist', ok([{'id': 1}]))
        fake_api.add_json('GET', f'{V1}/queued/getqueued', ok([]))

        with pytest.raises(TorrentNotFoundError, match='neither active nor queued'):
            await torbox.general.control_any_torrent(99, 'delete')


class TestUsenetAndWebDownloads:
    @pytest.mark.asyncio
    async def test_create_usenet_download(self, torbox, fake_api):
        fake_api.add_json('POST', f'{V1}/usenet/createusenetdownload', ok({'id': 3, 'name': 'nzb'}))

        download = await torbox.general.create_usenet_download(CreateUsenetRequest(link='https://nzb.test/1.nzb'))

        assert download.id == 3
        assert body_of(fake_api.requests[0]) == {'link': 'https://nzb.test/1.nzb'}

    @pytest.mark.asyncio
    async def test_usenet_list_control_and_download(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/usenet/mylist', ok([{'id': 3, 'download_state': 'downloading'}]))
        fake_api.add_json('POST', f'{V1}/usenet/controlusenetdownload', ok())
        fake_api.add_json('GET', f'{V1}/usenet/requestdl', ok('https://dl.torbox.test/usenet/3'))

        downloads = await torbox.general.get_usenet_list()
        await torbox.general.control_usenet_download(3, 'pause')
        url = await torbox.general.get_usenet_download_url(3, 1)

        assert downloads[0].download_state == 'downloading'
        assert body_of(fake_api.requests[1]) == {'usenet_id': 3, 'operation': 'pause'}
        assert url == 'https://dl.torbox.test/usenet/3'
        assert fake_api.requests[2].url.params['token'] == API_KEY
        assert fake_api.requests[2].url.params['usenet_id'] == '3'

    @pytest.mark.asyncio
    async def test_check_usenet_cached(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/usenet/checkcached', ok([{'hash': 'nzbhash', 'name': 'nzb'}]))

        result = await torbox.general.check_usenet_cached('NZBHASH')

        assert result.cached is True
        assert fake_api.requests[0].url.params['format'] == 'list'

    @pytest.mark.asyncio
    async def test_web_downloads(self, torbox, fake_api):
        fake_api.add_json('POST', f'{V1}/webdl/createwebdownload', ok({'id': 8, 'name': 'page'}))
        fake_api.add_json('POST', f'{V1}/webdl/controlwebdownload', ok())

        download = await torbox.general.create_web_download(
            CreateWebDownloadRequest(link='https://files.test/a.zip', as_queued=True)
        )
        await torbox.general.control_web_download(8, 'delete')

        assert download.id == 8
        assert body_of(fake_api.requests[0]) == {'link': 'https://files.test/a.zip', 'as_queued': True}
        assert body_of(fake_api.requests[1]) == {'web_id': 8, 'operation': 'delete'}


class TestAccount:
    @pytest.mark.asyncio
    async def test_get_user(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/user/me', ok({'id': 1, 'email': 'user@example.com', 'plan': 2}))

        user = await torbox.general.get_user()

        assert user.email == 'user@example.com'
        assert user.plan == 2

    @pytest.mark.asyncio
    async def test_envelope_failure_raises(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/user/me', failed('AUTH_ERROR', 'bad key'))

        with pytest.raises(APIError) as exc_info:
            await torbox.general.get_user()

        assert str(exc_info.value) == 'failed to get user: torbox API error: AUTH_ERROR - bad key'
        assert exc_info.value.operation == 'get user'
        assert exc_info.value.error == 'AUTH_ERROR'

    @pytest.mark.asyncio
    async def test_envelope_failure_with_detail_only(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/stats', failed(detail='Stats unavailable'))

        with pytest.raises(APIError, match='failed to get stats: torbox API error: Stats unavailable'):
            await torbox.general.get_stats()

    @pytest.mark.asyncio
    async def test_refresh_token_does_not_rotate_credentials(self, torbox, fake_api):
        fake_api.add_json('POST', f'{V1}/user/refreshtoken', ok({'token': 'new-token'}))
        fake_api.add_json('GET', f'{V1}/user/me', ok({'id': 1}))

        assert await torbox.general.refresh_token() == 'new-token'
        await torbox.general.get_user()

        assert fake_api.requests[-1].headers['Authorization'] == f'Bearer {API_KEY}'

    @pytest.mark.asyncio
    async def test_add_referral(self, torbox, fake_api):
        fake_api.add_json('POST', f'{V1}/user/addreferral', ok())

        await torbox.general.add_referral('REF-1')

        assert body_of(fake_api.requests[0]) == {'referral_code': 'REF-1'}

    @pytest.mark.asyncio
    async def test_notifications(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/notifications/mynotifications', ok([{'id': 1, 'title': 'Done'}]))
        fake_api.add_json('GET', f'{V1}/notifications/rss', ok([{'id': 2, 'title': 'Feed'}]))
        fake_api.add_json('POST', f'{V1}/notifications/clear', ok())

        notifications = await torbox.general.get_notifications()
        rss = await torbox.general.get_rss_notifications()
        await torbox.general.clear_notifications()

        assert notifications[0].title == 'Done'
        assert rss[0].title == 'Feed'
        assert fake_api.requests[-1].content == b''

    @pytest.mark.asyncio
    async def test_rss(self, torbox, fake_api):
        fake_api.add_json('POST', f'{V1}/rss/addrss', ok({'id': 4, 'url': 'https://feed.test/rss', 'name': 'f'}))
        fake_api.add_json('POST', f'{V1}/rss/modifyrss', ok({'id': 4, 'enabled': False}))
        fake_api.add_json('POST', f'{V1}/rss/controlrss', ok())

        feed = await torbox.general.add_rss(AddRSSRequest(url='https://feed.test/rss', name='f'))
        modified = await torbox.general.modify_rss(ModifyRSSRequest(rss_id=4, enabled=False))
        await torbox.general.control_rss(4, 'update')

        assert feed.id == 4
        assert modified.enabled is False
        assert body_of(fake_api.requests[1]) == {'rss_id': 4, 'enabled': False}
        assert body_of(fake_api.requests[2]) == {'rss_id': 4, 'operation': 'update'}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ('method', 'path', 'field'),
        [
            ('authorize_google_drive', 'googledrive', 'code'),
            ('authorize_dropbox', 'dropbox', 'code'),
            ('authorize_onedrive', 'onedrive', 'code'),
            ('authorize_gofile', 'gofile', 'api_key'),
            ('authorize_onefichier', '1fichier', 'api_key'),
        ],
    )
    async def test_integration_authorization(self, torbox, fake_api, method, path, field):
        fake_api.add_json('POST', f'{V1}/integration/{path}', ok())

        await getattr(torbox.general, method)('secret')

        assert body_of(fake_api.requests[0]) == {field: 'secret'}

    @pytest.mark.asyncio
    async def test_integration_jobs_and_stats(self, torbox, fake_api):
        fake_api.add_json('GET', f'{V1}/integration/jobs', ok([{'id': 1, 'type': 'gdrive', 'status': 'done'}]))
        fake_api.add_json('GET', f'{V1}/stats', ok({'total_torrents': 12, 'plan': 'pro'}))

        jobs = await torbox.general.get_integration_jobs()
        stats = await torbox.general.get_stats()

        assert jobs[0].status == 'done'
        assert stats.total_torrents == 12
        assert stats.plan == 'pro'


class TestRetriesThroughService:
    @pytest.mark.asyncio
    async def test_server_errors_are_retried_four_times(self, torbox, fake_api, no_sleep):
        fake_api.add('GET', f'{V1}/stats', *[httpx.Response(503) for _ in range(4)])

        with pytest.raises(APIError) as exc_info:
            await torbox.general.get_stats()

        assert len(fake_api.requests) == 4
        assert [c.args[0] for c in no_sleep.await_args_list] == [1.0, 2.0, 4.0]
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_rate_limit_then_success(self, torbox, fake_api, no_sleep):
        fake_api.add('GET', f'{V1}/user/me', httpx.Response(429, headers={'Retry-After': '3'}))
        fake_api.add_json('GET', f'{V1}/user/me', ok({'id': 1}))

        user = await torbox.general.get_user()

        assert user.id == 1
        no_sleep.assert_awaited_once_with(3.0)


@pytest.mark.asyncio
async def test_build_error_happens_before_any_request(torbox, fake_api):
    with pytest.raises(BuildError) as exc_info:
        await torbox.general._call(
            'create torrent', 'POST', 'api/torrents/createtorrent', body={'a': 1}, body_type=BodyType.FORM
        )

    assert fake_api.requests == []
    assert exc_info.value.operation == 'create torrent'
    assert str(exc_info.value).startswith('failed to create torrent: expected bytes')
