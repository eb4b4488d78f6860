"""Shortener controller: the state machine behind the input field

States:

    IDLE -> VALIDATING -> SUBMITTING -> (SUCCEEDED | FAILED) -> IDLE
                 |
                 +-> IDLE (validation error, no network call)

This controller handles a submission following this procedure:
    - Step 1: Validate the candidate URL (UrlValidator)
    - Step 2: Ask the remote service to shorten it, exactly once (ShortenClient)
    - Step 3: On success, display the short URL and insert it into the history (HistoryStore)
    - Step 4: Notify the user and return to IDLE

Only one submission can be in flight: `submit()` is a no-op while SUBMITTING.
The SUBMITTING check-and-set happens before the first await, so on a single
event loop no other submission can interleave.

Example:
    >>> controller = ShortenerController(
    ...     client=ShortenClient('https://sho.rt'),
    ...     store=HistoryStore(FileStorageDAO('~/.local/share/shortclient')),
    ...     base_url='https://sho.rt',
    ... )
    >>> controller.store.load()
    >>> await controller.submit('https://example.com')
    <ControllerState.SUCCEEDED: 'succeeded'>
    >>> controller.display_url(controller.short_url)
    'https://sho.rt/abc123'
"""

import asyncio
import logging
from enum import StrEnum

from shortclient.client import ShortenClient
from shortclient.constants import (
    CLEAR_SUCCESS_MESSAGE,
    COPY_FAILURE_MESSAGE,
    COPY_SUCCESS_MESSAGE,
    SHORTEN_FAILURE_MESSAGE,
    SHORTEN_SUCCESS_MESSAGE,
)
from shortclient.exceptions import ValidationError
from shortclient.formatting import display_url, format_age
from shortclient.history import HistoryStore
from shortclient.models import HistoryCollection, Notification, NotificationLevel, Shortened, ShortenedRecord
from shortclient.types import Clipboard, Clock, Notifier
from shortclient.utils.helpers import now_ms
from shortclient.validation import validate_url


logger = logging.getLogger(__name__)


class ControllerState(StrEnum):
    IDLE = 'idle'
    VALIDATING = 'validating'
    SUBMITTING = 'submitting'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


def log_notification(notification: Notification) -> None:
    """Default notifier: route notifications to the log."""
    level = logging.INFO if notification.level is NotificationLevel.SUCCESS else logging.ERROR
    logger.log(level, notification.message, extra={'notification': notification.level.value})


class ShortenerController:
    """Orchestrate validation, shortening and history updates

    Attributes:
        client (ShortenClient):
            Remote shorten endpoint.
        store (HistoryStore):
            Local history cache. Load it before the first render.
        base_url (str):
            Base of display links (`{base_url}/{short_url}`).
        state (ControllerState):
            Current state. IDLE between submissions.
        candidate (str):
            Current content of the input field.
        short_url (str | None):
            Short URL currently on display (last success).
        error (ValidationError | None):
            Inline validation error of the last attempt.
        closed (bool):
            True once torn down. Late responses are then ignored.
    """

    def __init__(
        self,
        client: ShortenClient,
        store: HistoryStore,
        base_url: str,
        notifier: Notifier = log_notification,
        clock: Clock = now_ms,
    ):
        self.client = client
        self.store = store
        self.base_url = base_url
        self.notifier = notifier
        self.clock = clock

        self.state = ControllerState.IDLE
        self.candidate = ''
        self.short_url: str | None = None
        self.error: ValidationError | None = None
        self.closed = False

    @property
    def history(self) -> HistoryCollection:
        return self.store.records

    @property
    def submitting(self) -> bool:
        return self.state is ControllerState.SUBMITTING

    async def submit(self, candidate: str | None = None) -> ControllerState | None:
        """Submit the input field (or `candidate`) for shortening

        Args:
            candidate (str | None):
                URL to shorten. Replaces the input field content when given.

        Returns:
            ControllerState | None:
                Terminal state of this attempt: IDLE (validation error), SUCCEEDED or FAILED.
                None when the call was a no-op (a submission is already in flight,
                the controller is closed, or it was closed while the request was in flight).
        """
        if self.closed or self.submitting:
            logger.debug('Ignored submit.', extra={'state': self.state.value, 'closed': self.closed})
            return None

        if candidate is not None:
            self.candidate = candidate

        # 1- Validate
        self.state = ControllerState.VALIDATING
        self.error = None
        try:
            original_url = validate_url(self.candidate)
        except ValidationError as e:
            self.error = e
            self.state = ControllerState.IDLE
            logger.info('Rejected invalid URL.', extra={'candidate': self.candidate})
            return ControllerState.IDLE

        # 2- Shorten (exactly one request)
        self.state = ControllerState.SUBMITTING
        try:
            outcome = await self.client.shorten(original_url)
        except asyncio.CancelledError:
            self.state = ControllerState.IDLE
            raise
        except Exception:
            # The client reports failures as Failed; anything escaping it still ends this attempt
            logger.exception('Shorten request raised.', extra={'originalUrl': original_url})
            outcome = None

        if self.closed:
            self.state = ControllerState.IDLE
            logger.debug('Ignored response after close.', extra={'originalUrl': original_url})
            return None

        # 3- Apply outcome
        if isinstance(outcome, Shortened):
            terminal = self._succeed(original_url, outcome)
        else:
            terminal = self._fail()

        # 4- Back to IDLE
        self.state = ControllerState.IDLE
        return terminal

    def _succeed(self, original_url: str, outcome: Shortened) -> ControllerState:
        self.state = ControllerState.SUCCEEDED
        self.short_url = outcome.short_url
        record = ShortenedRecord(original_url=original_url, short_url=outcome.short_url, timestamp=self.clock())
        self.store.insert(record)
        self._notify(NotificationLevel.SUCCESS, SHORTEN_SUCCESS_MESSAGE)
        return ControllerState.SUCCEEDED

    def _fail(self) -> ControllerState:
        self.state = ControllerState.FAILED
        self._notify(NotificationLevel.ERROR, SHORTEN_FAILURE_MESSAGE)
        return ControllerState.FAILED

    def clear_history(self) -> HistoryCollection:
        """Handle the 'Clear List' action"""
        cleared = self.store.clear()
        self._notify(NotificationLevel.SUCCESS, CLEAR_SUCCESS_MESSAGE)
        return cleared

    def copy(self, text: str, clipboard: Clipboard) -> bool:
        """Hand `text` to a clipboard collaborator and notify the outcome

        Returns:
            bool: True if the clipboard accepted the text.
        """
        try:
            clipboard(text)
        except Exception:
            logger.exception('Clipboard write failed.')
            self._notify(NotificationLevel.ERROR, COPY_FAILURE_MESSAGE)
            return False

        self._notify(NotificationLevel.SUCCESS, COPY_SUCCESS_MESSAGE)
        return True

    def display_url(self, short_url: str) -> str:
        return display_url(self.base_url, short_url)

    def history_lines(self, now: int | None = None) -> list[tuple[str, str]]:
        """Render the history as (display link, age label) pairs, most recent first"""
        now = self.clock() if now is None else now
        return [(self.display_url(record.short_url), format_age(record.timestamp, now)) for record in self.history]

    def close(self) -> None:
        """Tear the controller down: later responses and submissions are ignored"""
        self.closed = True

    def _notify(self, level: NotificationLevel, message: str) -> None:
        self.notifier(Notification(level=level, message=message))
