"""Pytest configuration and shared fixtures"""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
from faker import Faker

from torbox_client.client import TorboxClient
from torbox_client.config import Settings

fake = Faker()

API_KEY = 'test-api-key'
GENERAL_BASE_URL = 'https://api.torbox.test/v1'
SEARCH_BASE_URL = 'https://search-api.torbox.test'


def ok(data: Any = None) -> dict[str, Any]:
    """Successful envelope around `data`"""
    return {'success': True, 'error': '', 'detail': '', 'data': data}


def failed(error: str = '', detail: str = '') -> dict[str, Any]:
    return {'success': False, 'error': error, 'detail': detail, 'data': None}


class FakeTorboxAPI:
    """Canned responses per (method, path), consumed in order"""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, *responses: httpx.Response) -> None:
        self.routes.setdefault((method, path), []).extend(responses)

    def add_json(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        self.add(method, path, httpx.Response(status_code, json=payload))

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json=failed('NOT_FOUND', f'no route for {request.method} {request.url.path}'))
        return queue.pop(0)


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        api_key=API_KEY,
        general_base_url=GENERAL_BASE_URL,
        search_base_url=SEARCH_BASE_URL,
        max_retries=3,
        log_level='DEBUG',
    )


@pytest.fixture
def fake_api() -> FakeTorboxAPI:
    return FakeTorboxAPI()


@pytest.fixture
def no_sleep() -> AsyncMock:
    """Backoff sleep that returns immediately and records the delays"""
    return AsyncMock(return_value=None)


@pytest_asyncio.fixture
async def torbox(
    fake_api: FakeTorboxAPI, test_settings: Settings, no_sleep: AsyncMock
) -> AsyncGenerator[TorboxClient]:
    """Client wired to the fake API"""
    client = TorboxClient(API_KEY, settings=test_settings, transport=httpx.MockTransport(fake_api), sleep=no_sleep)
    yield client
    await client.aclose()


@pytest.fixture
def sample_hash() -> str:
    return fake.sha1()


@pytest.fixture
def sample_torrent_data(sample_hash: str) -> dict[str, Any]:
    """Active torrent payload as returned by mylist"""
    return {
        'id': fake.random_int(min=1, max=100_000),
        'hash': sample_hash,
        'name': 'Test Movie (2023) 1080p',
        'magnet': f'magnet:?xt=urn:btih:{sample_hash}&dn=Test+Movie',
        'size': 1024 * 1024 * 1024 * 2,  # 2GB
        'download_state': 'downloading',
        'progress': 0.5,
        'download_speed': 1_500_000,
        'upload_speed': 20_000,
        'ratio': 0.25,
        'seeds': 42,
        'peers': 10,
        'created_at': '2024-03-01T10:00:00Z',
        'updated_at': '2024-03-01T11:00:00Z',
        'expires_at': None,
        'files': [{'id': 0, 'name': 'movie.mkv', 'size': 2_000_000_000}],
    }


@pytest.fixture
def sample_magnet(sample_hash: str) -> str:
    return f'magnet:?xt=urn:btih:{sample_hash}&dn=Test+Movie&tr=udp%3A%2F%2Ftracker.example%3A1337'
