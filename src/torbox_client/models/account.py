"""User, notification, RSS, integration and stats payloads"""

from .common import TorboxModel


class User(TorboxModel):
    id: int = 0
    email: str = ''
    plan: int | str = ''
    premium_expiry: str = ''
    cooldown_until: str = ''
    auth0_id: str = ''
    total_downloaded: int = 0
    total_uploaded: int = 0
    customer: str = ''
    server: int = 0
    is_subscribed: bool = False
    user_referral: str = ''
    base_email: str | None = None


class RefreshedToken(TorboxModel):
    token: str = ''


class Notification(TorboxModel):
    id: int = 0
    type: str = ''
    title: str = ''
    message: str = ''
    read: bool = False
    created_at: str = ''


class RSSFeed(TorboxModel):
    id: int = 0
    url: str = ''
    name: str = ''
    enabled: bool = False
    created_at: str = ''
    updated_at: str = ''


class IntegrationJob(TorboxModel):
    id: int = 0
    type: str = ''
    status: str = ''
    file_name: str = ''
    file_size: int = 0
    progress: float = 0.0
    destination: str = ''
    created_at: str = ''
    updated_at: str = ''


class Stats(TorboxModel):
    total_downloaded: int = 0
    total_uploaded: int = 0
    total_torrents: int = 0
    active_torrents: int = 0
    queued_torrents: int = 0
    total_usenet: int = 0
    total_webdl: int = 0
    available_space: int = 0
    used_space: int = 0
    plan: int | str = ''
    premium_expiry: str | None = None
