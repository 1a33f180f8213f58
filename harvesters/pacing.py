#!/usr/bin/env python3
"""
Request pacing policies.

The runner calls ``wait()`` before every outbound request. Anything with a
``wait()`` method can stand in, which keeps tests free of real sleeps.
"""

import time
from typing import Callable


class FixedDelayPacing:
    """Sleep a constant interval before each request"""

    def __init__(self, seconds: float = 2.0, sleep: Callable[[float], None] = time.sleep):
        if seconds < 0:
            raise ValueError("Pacing delay cannot be negative")
        self.seconds = seconds
        self._sleep = sleep

    def wait(self):
        if self.seconds:
            self._sleep(self.seconds)


class NoPacing:
    """Issue requests back to back"""

    def wait(self):
        return None
