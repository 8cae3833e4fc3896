"""
Random Stream Device

Transport-agnostic endpoint around a RecurrenceGenerator, modelled on a
read-only character device:
- only one client may hold the device open at a time
- reads return the next generator output
- writes are rejected

Events (open, close, busy, rejected write) are kept in a bounded
in-memory log for diagnostics.
"""

import io
import threading
import time
from collections import deque
from typing import Deque, List, Tuple

from .Generator import RecurrenceGenerator


DEVICE_NAME = "gfrng"


class DeviceBusyError(RuntimeError):
    """Device is already held open by another client."""


class RandomDevice:
    """
    Exclusive-open random byte device.

    Example:
        >>> with RandomDevice(generator) as dev:
        ...     data = dev.read(16)
    """

    def __init__(self, generator: RecurrenceGenerator, history_size: int = 100):
        """
        Initialize device.

        Args:
            generator: Source of output bytes
            history_size: Number of log events to keep
        """
        self.generator = generator
        self.name = DEVICE_NAME
        self._lock = threading.Lock()
        self._log_lock = threading.Lock()
        self._is_open = False
        self._log_messages: Deque[Tuple[float, str, str]] = deque(maxlen=history_size)

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._is_open

    def open(self) -> 'RandomDevice':
        """
        Acquire the device.

        Raises:
            DeviceBusyError: If the device is already open
        """
        with self._lock:
            busy = self._is_open
            self._is_open = True
        if busy:
            self.log("WARN", "Device is busy")
            raise DeviceBusyError(f"Device {self.name} is already open")

        self.log("INFO", "Successfully opened a device")
        return self

    def close(self) -> None:
        """Release the device."""
        with self._lock:
            self._is_open = False
        self.log("INFO", "Successfully closed a device")

    def __enter__(self) -> 'RandomDevice':
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def read(self, count: int = 1) -> bytes:
        """
        Read generator output.

        Args:
            count: Number of bytes

        Raises:
            RuntimeError: If the device is not open
        """
        if not self.is_open:
            raise RuntimeError(f"Device {self.name} is not open")
        return self.generator.read(count)

    def write(self, data: bytes) -> int:
        """Writing is not supported."""
        self.log("ERROR", "Write operation is not supported")
        raise io.UnsupportedOperation("Write operation is not supported")

    def log(self, level: str, message: str) -> None:
        """Add log message."""
        with self._log_lock:
            self._log_messages.append((time.time(), level, message))

    def get_log_messages(self, count: int = 10) -> List[Tuple[float, str, str]]:
        """Get recent log messages."""
        with self._log_lock:
            return list(self._log_messages)[-count:]
