"""Search API metadata payloads"""

from typing import Any

from pydantic import Field, field_validator

from .common import TorboxModel
from .torrent import Torrent


class Title(TorboxModel):
    language: str = ''
    title: str = ''


class Trailer(TorboxModel):
    youtube_id: str = ''
    full_url: str = ''
    thumbnail: str = ''


def parse_release_years(value: Any) -> list[int]:
    """Parse `releaseYears` given as "1999", "2001-2004", an int or a list"""
    if value is None:
        return []
    if isinstance(value, bool):
        return []
    if isinstance(value, int):
        return [value]
    if isinstance(value, list):
        return [int(year) for year in value]
    if not isinstance(value, str):
        return []

    text = value.strip()
    if not text:
        return []
    years = []
    for part in text.split('-'):
        part = part.strip()
        if not part.isdigit():
            raise ValueError(f'invalid release year: {part!r}')
        years.append(int(part))
    return years


class Metadata(TorboxModel):
    global_id: str = Field(default='', alias='globalID')
    id: str = ''
    title: str = ''
    titles: list[str] = Field(default_factory=list)
    titles_full: list[Title] = Field(default_factory=list)
    link: str = ''
    description: str = ''
    genres: list[str] = Field(default_factory=list)
    media_type: str = Field(default='', alias='mediaType')
    rating: float = 0.0
    languages: list[str] = Field(default_factory=list)
    content_rating: str = Field(default='', alias='contentRating')
    actors: list[str] = Field(default_factory=list)
    trailer: Trailer = Field(default_factory=Trailer)
    characters: list[str] = Field(default_factory=list)
    image: str = ''
    is_adult: bool = Field(default=False, alias='isAdult')
    type: str = ''
    released_date: str = Field(default='', alias='releasedDate')
    episodes_number: int = Field(default=0, alias='episodesNumber')
    runtime: str = ''
    release_years: list[int] = Field(default_factory=list, alias='releaseYears')
    keywords: list[str] = Field(default_factory=list)
    backdrop: str = ''

    @field_validator('release_years', mode='before')
    @classmethod
    def split_release_years(cls, v: Any) -> list[int]:
        return parse_release_years(v)

    @field_validator('id', mode='before')
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class TorrentSearchResult(TorboxModel):
    """Torrents matching a search id, with the metadata of the title"""

    metadata: Metadata = Field(default_factory=Metadata)
    torrents: list[Torrent] = Field(default_factory=list)
