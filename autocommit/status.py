"""Status reporting while waiting on the model."""

from __future__ import annotations

import random
import sys
import threading
from typing import Optional, Protocol, TextIO

RESET = "\033[0m"
CYAN = "\033[96m"
GREEN = "\033[92m"
RED = "\033[91m"

SPINNER_FRAMES = [
    "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏",
    "|/-\\",
    "◐◓◑◒",
    "▖▘▝▗",
    "◢◣◤◥",
    "⣾⣽⣻⢿⡿⣟⣯⣷",
]


class StatusReporter(Protocol):
    def start(self, label: str) -> None: ...

    def stop(self, message: str, success: bool = True) -> None: ...


class NullStatus:
    """Reporter that shows nothing."""

    def start(self, label: str) -> None:
        pass

    def stop(self, message: str, success: bool = True) -> None:
        pass


class Spinner:
    """Terminal spinner animated on a daemon thread."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        frames: Optional[str] = None,
        interval: float = 0.1,
    ) -> None:
        self.stream = stream or sys.stderr
        self.frames = frames or random.choice(SPINNER_FRAMES)
        self.interval = interval
        self._label = ""
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self, label: str) -> None:
        if self._thread is not None:
            return
        self._label = label
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()

    def _spin(self) -> None:
        index = 0
        while True:
            frame = self.frames[index % len(self.frames)]
            self.stream.write(f"\r{CYAN}{frame}{RESET} {self._label}")
            self.stream.flush()
            index += 1
            if self._stop_event.wait(self.interval):
                break

    def stop(self, message: str, success: bool = True) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None
        mark = f"{GREEN}✔{RESET}" if success else f"{RED}✘{RESET}"
        self.stream.write(f"\r\033[K{mark} {message}\n")
        self.stream.flush()
