"""Search API: title metadata and torrents by external id"""

from collections.abc import Mapping
from typing import Any

from torbox_client.constants import PATH_SEARCH_META, PATH_SEARCH_TORRENTS
from torbox_client.models.metadata import Metadata, TorrentSearchResult
from torbox_client.transport.request import BodyType, QueryValue, encode_multipart

from .base import BaseService

SEARCH_PARAMS: dict[str, QueryValue] = {
    'metadata': True,
    'check_cache': True,
    'check_owned': True,
}


class SearchService(BaseService):
    """Endpoints of the search API

    Ids are addressed as `<id_type>:<id>`, e.g. `imdb:tt0111161`.
    """

    async def _search(
        self,
        operation: str,
        path: str,
        data_type: Any,
        fields: Mapping[str, QueryValue] | None = None,
    ) -> Any:
        if not fields:
            return await self._call(operation, 'GET', path, data_type, params=SEARCH_PARAMS)

        # Form fields of search calls travel as multipart/form-data
        body, content_type = encode_multipart(fields)
        return await self._call(
            operation,
            'POST',
            path,
            data_type,
            params=SEARCH_PARAMS,
            body=body,
            body_type=BodyType.FILE,
            content_type=content_type,
        )

    async def get_meta(self, id_type: str, id: str) -> Metadata | None:
        return await self._search('get metadata', f'{PATH_SEARCH_META}/{id_type}:{id}', Metadata)

    async def get_torrents(
        self, id_type: str, id: str, fields: Mapping[str, QueryValue] | None = None
    ) -> TorrentSearchResult:
        data = await self._search('get torrents', f'{PATH_SEARCH_TORRENTS}/{id_type}:{id}', TorrentSearchResult, fields)
        return data or TorrentSearchResult()
