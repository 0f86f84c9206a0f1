"""Command line entry point for torbox-client"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from torbox_client.client import TorboxClient
from torbox_client.config import Settings, settings
from torbox_client.errors import ConfigurationError, TorboxError
from torbox_client.helpers import format_progress, humanize_bytes, humanize_speed
from torbox_client.models.torrent import Torrent

log = logging.getLogger(f'{settings.log_prefix}.cli')

SAMPLE_HASH = 'abc123def456'
SAMPLE_QUERY = 'ubuntu'

TORRENT_COLUMNS = ('ID', 'Name', 'Status', 'Size', 'Progress', 'Download Speed', 'Upload Speed', 'Ratio')


def build_torrent_table(torrents: list[Torrent]) -> Table:
    """Table of active torrents"""
    table = Table(title='Active torrents')
    for column in TORRENT_COLUMNS:
        table.add_column(column, justify='right' if column not in ('Name', 'Status') else 'left')

    for torrent in torrents:
        table.add_row(
            str(torrent.id),
            escape(torrent.name),
            escape(torrent.download_state),
            humanize_bytes(torrent.size),
            format_progress(torrent.progress),
            humanize_speed(torrent.download_speed),
            humanize_speed(torrent.upload_speed),
            f'{torrent.ratio:.2f}',
        )
    return table


async def run_list(client: TorboxClient, console: Console) -> int:
    try:
        torrents = await client.general.get_active_torrents()
    except TorboxError as e:
        log.error('%s', e)
        return 1

    console.print(build_torrent_table(torrents))
    return 0


async def _step(title: str, call: Callable[[], Awaitable[Any]], console: Console) -> Any:
    """Run one demo step, logging a failure instead of aborting the walkthrough"""
    console.rule(title)
    try:
        result = await call()
    except TorboxError as e:
        log.error('%s', e)
        return None
    return result


async def run_demo(client: TorboxClient, console: Console) -> int:
    """Walk through the read-only endpoints of the account"""
    general = client.general

    user = await _step('User', general.get_user, console)
    if user:
        console.print(f'{user.email} (plan {user.plan}, premium until {user.premium_expiry or "n/a"})')

    stats = await _step('Stats', general.get_stats, console)
    if stats:
        console.print(
            f'torrents: {stats.total_torrents}, downloaded: {humanize_bytes(stats.total_downloaded)}, '
            f'uploaded: {humanize_bytes(stats.total_uploaded)}'
        )

    active = await _step('Active torrents', general.get_active_torrents, console)
    if active is not None:
        console.print(build_torrent_table(active))

    queued = await _step('Queued torrents', general.get_queued_torrents, console)
    for download in queued or []:
        console.print(f'{download.id}: {escape(download.name)}')

    usenet = await _step('Usenet downloads', general.get_usenet_list, console)
    for download in usenet or []:
        console.print(f'{download.id}: {escape(download.name)} ({download.download_state})')

    notifications = await _step('Notifications', general.get_notifications, console)
    for notification in notifications or []:
        console.print(f'{escape(notification.title)}: {escape(notification.message)}')

    jobs = await _step('Integration jobs', general.get_integration_jobs, console)
    for job in jobs or []:
        console.print(f'{job.type} {escape(job.file_name)}: {job.status}')

    cached = await _step('Cache check', lambda: general.check_cached(SAMPLE_HASH), console)
    if cached:
        console.print(f'{cached.hash}: {"cached" if cached.cached else "not cached"}')

    results = await _step('Search', lambda: general.search_torrents(SAMPLE_QUERY), console)
    for torrent in results or []:
        console.print(f'{escape(torrent.name)} ({humanize_bytes(torrent.size)})')

    return 0


async def run(mode: str, config: Settings, console: Console | None = None) -> int:
    console = console or Console()
    async with TorboxClient.from_settings(config) as client:
        if mode == 'demo':
            return await run_demo(client, console)
        return await run_list(client, console)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application"""
    parser = argparse.ArgumentParser(description='TorBox API client')
    parser.add_argument(
        'mode',
        nargs='?',
        default='list',
        choices=['list', 'demo'],
        help='Run mode: list for a table of active torrents, demo for a walkthrough of the API',
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        return asyncio.run(run(args.mode, settings))
    except ConfigurationError as e:
        log.error('%s', e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
