# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Per-client request spacing.

Airtable rejects more than 5 requests per second per base with a 429 and a
30 second penalty, so every outbound request first passes through
:meth:`_Throttle.wait`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class _Throttle:
    """
    Enforce a minimum interval between the start of consecutive requests.

    State is one timestamp owned by the instance; two throttles never
    coordinate with each other.

    :param min_interval: Minimum spacing in seconds.
    :type min_interval: :class:`float`
    :param clock: Monotonic clock returning seconds. Defaults to :func:`time.monotonic`.
    :param sleep: Blocking sleep taking seconds. Defaults to :func:`time.sleep`.
    """

    def __init__(
        self,
        min_interval: float,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self.last_request_at: Optional[float] = None

    def wait(self) -> float:
        """
        Block until a request may start, then record the start time.

        :return: Seconds spent waiting (0.0 when no wait was needed).
        :rtype: :class:`float`
        """
        waited = 0.0
        if self.last_request_at is not None:
            elapsed = self._clock() - self.last_request_at
            if elapsed < self.min_interval:
                waited = self.min_interval - elapsed
                logger.debug("Throttling request for %.3fs", waited)
                self._sleep(waited)
        self.last_request_at = self._clock()
        return waited
