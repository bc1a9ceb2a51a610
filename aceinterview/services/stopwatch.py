import time
from typing import Callable, Optional


class Stopwatch:
    """Answer timer; counts whole seconds from the last start()"""
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.start_time: Optional[float] = None
        self._frozen_elapsed = 0.0

    @property
    def is_running(self) -> bool:
        return self.start_time is not None

    def start(self):
        self._frozen_elapsed = 0.0
        self.start_time = self._clock()

    def stop(self):
        if self.start_time is not None:
            self._frozen_elapsed = self._clock() - self.start_time
            self.start_time = None

    def reset(self):
        self.start_time = None
        self._frozen_elapsed = 0.0

    @property
    def elapsed_seconds(self) -> int:
        if self.start_time is None:
            return int(self._frozen_elapsed)
        return int(self._clock() - self.start_time)
