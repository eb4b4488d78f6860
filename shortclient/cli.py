"""Command line front end of the shortening client.

This module plays the role of the web page:
    - `shorten URL`   the input field + "Shorten" button
    - `history`       the "Previously Shortened URLs" list
    - `clear`         the "Clear List" button
    - `watch`         the history list, with age labels refreshed periodically

CLI usage:
    $ shortclient --api-url https://sho.rt shorten https://example.com
    https://sho.rt/abc123
    $ shortclient history
    https://sho.rt/abc123  (2 minutes ago)  https://example.com
    $ shortclient --storage redis history --json
    $ shortclient watch --interval 60
    $ shortclient clear

Exit codes:
    0  success
    1  the shortening service failed
    2  invalid input URL or invalid configuration
    130 interrupted (Ctrl-C)

Results go to stdout. Notifications and errors go to stderr, logs (JSON) go to stderr too.
"""

import sys
import json
import asyncio
import argparse
import logging
from typing import TextIO

from shortclient.client import ShortenClient
from shortclient.controller import ControllerState, ShortenerController
from shortclient.dao import FileStorageDAO, HistoryStorageBaseDAO, MemoryStorageDAO, RedisStorageDAO
from shortclient.dao.exceptions import DataStoreError
from shortclient.exceptions import ConfigurationError
from shortclient.history import HistoryStore
from shortclient.models import Notification
from shortclient.ticker import AgeRefreshTicker
from shortclient.utils.config import ClientConfig, app_prefix, load_config, require_api_url
from shortclient.utils.helpers import from_ms
from shortclient.utils.logging import initialize_logging
from shortclient.formatting import format_age


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REQUEST_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def build_storage(config: ClientConfig) -> HistoryStorageBaseDAO:
    """Instantiate the configured history storage backend

    An unreachable Redis degrades to process-local storage: the history is a
    convenience and must never block shortening.
    """
    if config.storage == 'memory':
        return MemoryStorageDAO()
    if config.storage == 'redis':
        try:
            return RedisStorageDAO(**config.redis.as_dao_kwargs(), prefix=app_prefix())
        except DataStoreError as e:
            logger.warning('History storage unavailable, history will not persist.', extra={'storage': 'redis', 'error': str(e)})
            return MemoryStorageDAO()
    return FileStorageDAO(data_dir=config.data_dir)


def build_controller(config: ClientConfig, base_url: str, err: TextIO = sys.stderr) -> ShortenerController:
    store = HistoryStore(build_storage(config))
    store.load()

    def notify(notification: Notification) -> None:
        print(f'[{notification.level.value}] {notification.message}', file=err)

    return ShortenerController(
        client=ShortenClient(base_url, timeout=config.request_timeout),
        store=store,
        base_url=base_url,
        notifier=notify,
    )


def render_history(controller: ShortenerController, out: TextIO = sys.stdout, as_json: bool = False) -> None:
    """Print the history, most recent first"""
    now = controller.clock()

    if as_json:
        # fmt: off
        items = [
            {
                'original_url': record.original_url,
                'short_url': record.short_url,
                'url': controller.display_url(record.short_url),
                'created_at': from_ms(record.timestamp).isoformat(),
                'age': format_age(record.timestamp, now),
            }
            for record in controller.history
        ]
        # fmt: on
        print(json.dumps(items, indent=2), file=out)
        return

    if not controller.history:
        print('No shortened URLs yet.', file=out)
        return

    for record, (url, age) in zip(controller.history, controller.history_lines(now)):
        print(f'{url}  ({age})  {record.original_url}', file=out)


async def _shorten(controller: ShortenerController, url: str, as_json: bool, out: TextIO, err: TextIO) -> int:
    state = await controller.submit(url)

    if state is ControllerState.SUCCEEDED:
        link = controller.display_url(controller.short_url)
        if as_json:
            print(json.dumps({'original_url': url, 'short_url': controller.short_url, 'url': link}, indent=2), file=out)
        else:
            print(link, file=out)
        return EXIT_OK

    if controller.error is not None:
        print(f'error: {controller.error}', file=err)
        return EXIT_USAGE

    return EXIT_REQUEST_FAILED


async def _watch(controller: ShortenerController, interval: float, ticks: int | None, out: TextIO) -> int:
    done = asyncio.Event()
    frames = 0

    def render() -> None:
        nonlocal frames
        if frames:
            print('', file=out)
        render_history(controller, out)
        out.flush()
        frames += 1
        # First frame is the initial render, the following ones are refreshes
        if ticks is not None and frames > ticks:
            done.set()

    render()
    async with AgeRefreshTicker(render, interval=interval):
        await done.wait()
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shortclient',
        description='Shorten URLs through a remote service and keep a short local history of recent conversions',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug output to stderr')
    parser.add_argument('--api-url', default=None, help='Base URL of the shortening service (default: $SHORTCLIENT_API_URL)')
    parser.add_argument(
        '--storage',
        choices=['file', 'redis', 'memory'],
        default=None,
        help='History storage backend (default: $SHORTCLIENT_STORAGE or file)',
    )
    parser.add_argument('--data-dir', default=None, help='Directory of the file storage backend')

    commands = parser.add_subparsers(dest='command', required=True)

    shorten = commands.add_parser('shorten', help='Shorten a URL and add it to the history')
    shorten.add_argument('url', help='Absolute URL to shorten, e.g. https://example.com')
    shorten.add_argument('--json', action='store_true', help='Print the result as JSON')

    history = commands.add_parser('history', help='List recently shortened URLs')
    history.add_argument('--json', action='store_true', help='Print the history as JSON')

    commands.add_parser('clear', help='Clear the local history')

    watch = commands.add_parser('watch', help='Show the history and keep its age labels fresh')
    watch.add_argument('--interval', type=float, default=None, help='Seconds between refreshes (default: 60)')
    watch.add_argument('--ticks', type=int, default=None, help='Stop after this many refreshes (default: run until Ctrl-C)')

    return parser


def main(argv: list[str] | None = None, out: TextIO | None = None, err: TextIO | None = None) -> int:
    """CLI entry point.

    Steps:
        - Parse CLI arguments and initialize logging
        - Resolve configuration (flags > environment > YAML file > defaults)
        - Load (and prune) the local history
        - Run the requested command

    Returns:
        int: process exit code.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    args = build_parser().parse_args(argv)

    initialize_logging('DEBUG' if args.verbose else None)

    try:
        config = load_config(
            api_url=args.api_url,
            storage=args.storage,
            data_dir=args.data_dir,
            refresh_interval=getattr(args, 'interval', None),
        )
        # `clear` doesn't render links, so it can run without a service URL
        base_url = (config.api_url or '') if args.command == 'clear' else require_api_url(config)
    except ConfigurationError as e:
        print(f'error: {e}', file=err)
        return EXIT_USAGE

    controller = build_controller(config, base_url, err=err)
    try:
        match args.command:
            case 'shorten':
                return asyncio.run(_shorten(controller, args.url, args.json, out, err))
            case 'history':
                render_history(controller, out, as_json=args.json)
                return EXIT_OK
            case 'clear':
                controller.clear_history()
                return EXIT_OK
            case 'watch':
                return asyncio.run(_watch(controller, config.refresh_interval, args.ticks, out))
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    finally:
        controller.close()

    return EXIT_USAGE


if __name__ == '__main__':
    sys.exit(main())
