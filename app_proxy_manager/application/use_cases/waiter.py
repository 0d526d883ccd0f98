"""Polling until freshly created directory objects become readable."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..exceptions import DirectoryOperationError, ObjectNotVisibleError
from ..ports import DirectoryGateway

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 30
DEFAULT_INTERVAL_SECONDS = 2.0


class EventualConsistencyWaiter:
    """
    Blocks until a just-created application can be read back.

    The create call returns before the object is queryable. A 404 while
    polling is the expected transient state; any other failure is logged and
    counted as an unsuccessful attempt.
    """

    def __init__(
        self,
        gateway: DirectoryGateway,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        backoff_factor: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize the waiter.

        Args:
            gateway: Directory polled until the application is visible.
            max_attempts: Reads made before giving up.
            interval_seconds: Pause before the second attempt.
            backoff_factor: Multiplier applied to the pause after each attempt.
            sleep: Coroutine used to pause between attempts.
        """
        if max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {max_attempts}"
            raise ValueError(msg)
        if backoff_factor < 1.0:
            msg = f"backoff_factor must be at least 1.0, got {backoff_factor}"
            raise ValueError(msg)

        self._gateway = gateway
        self._max_attempts = max_attempts
        self._interval_seconds = interval_seconds
        self._backoff_factor = backoff_factor
        self._sleep = sleep

    async def wait_for_application(self, application_id: str) -> int:
        """
        Poll until the application is readable.

        Returns:
            The number of reads it took.

        Raises:
            ObjectNotVisibleError: If the application is still unreadable after
                the last attempt.
        """
        delay = self._interval_seconds

        for attempt in range(1, self._max_attempts + 1):
            if await self._is_visible(application_id):
                logger.debug("Application %s visible after %d attempt(s)", application_id, attempt)
                return attempt

            if attempt == self._max_attempts:
                break

            logger.info("Waiting for application %s to be created, attempt %d", application_id, attempt)
            await self._sleep(delay)
            delay *= self._backoff_factor

        msg = f"Failed to find application {application_id} after {self._max_attempts} attempts"
        raise ObjectNotVisibleError(msg)

    async def _is_visible(self, application_id: str) -> bool:
        try:
            await self._gateway.read_application(application_id)
        except DirectoryOperationError as e:
            if not e.is_not_found:
                logger.warning("Unexpected error reading application %s: %s", application_id, e)
            return False
        return True
