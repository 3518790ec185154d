"""
WindowStateStore — window geometry across runs.

Debounce state machine (one per window):
    Idle ──schedule_save──▶ PendingWrite(deadline, geometry)
    PendingWrite ──schedule_save──▶ PendingWrite(new deadline, new geometry)
    PendingWrite ──poll(now >= deadline)──▶ Idle   (one write)
    any ──cancel──▶ Idle
    any ──flush──▶ Idle                             (cancel first, then write)

The clock is injected so coalescing is testable without real timers.
load() never raises: every failure degrades to FALLBACK_GEOMETRY.
No Qt imports — the window owns the QTimer and calls poll().
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from chatlite.core.constants import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    NEW_WINDOW_OFFSET,
    WINDOW_STATE_DEBOUNCE_MS,
)
from chatlite.core.exceptions import StateFileError
from chatlite.utils.paths import read_json, write_json_atomic

_log = logging.getLogger("chatlite.services.window_state")

Clock = Callable[[], float]
Writer = Callable[[Path, Any], None]


@dataclass(frozen=True)
class WindowGeometry:
    width: int
    height: int
    x: Optional[int] = None
    y: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"window size must be positive: {self.width}x{self.height}")

    def to_record(self) -> dict:
        record: dict = {"width": self.width, "height": self.height}
        if self.x is not None:
            record["x"] = self.x
        if self.y is not None:
            record["y"] = self.y
        return record

    @classmethod
    def from_record(cls, data: Any) -> "WindowGeometry":
        """Raises StateFileError if width/height are not positive numbers."""
        if not isinstance(data, dict):
            raise StateFileError("window state is not a JSON object")
        width = _as_int(data.get("width"))
        height = _as_int(data.get("height"))
        if width is None or height is None or width <= 0 or height <= 0:
            raise StateFileError("window state has no positive width/height")
        return cls(width=width, height=height, x=_as_int(data.get("x")), y=_as_int(data.get("y")))

    def cascaded(self, offset: int = NEW_WINDOW_OFFSET) -> "WindowGeometry":
        """Same size, shifted down-right; used for a window opened from another."""
        return WindowGeometry(
            width=self.width,
            height=self.height,
            x=None if self.x is None else self.x + offset,
            y=None if self.y is None else self.y + offset,
        )


FALLBACK_GEOMETRY = WindowGeometry(width=DEFAULT_WINDOW_WIDTH, height=DEFAULT_WINDOW_HEIGHT)


@dataclass(frozen=True)
class PendingWrite:
    deadline: float        # clock seconds
    geometry: WindowGeometry


class WindowStateStore:
    """
    Owned by exactly one window. Serializes/deserializes only; the window
    owns the geometry itself.
    """

    def __init__(
        self,
        path: Path,
        debounce_ms: int = WINDOW_STATE_DEBOUNCE_MS,
        clock: Clock = time.monotonic,
        writer: Writer = write_json_atomic,
    ) -> None:
        self._path = path
        self._delay = debounce_ms / 1000.0
        self._clock = clock
        self._writer = writer
        self._pending: Optional[PendingWrite] = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def pending(self) -> Optional[PendingWrite]:
        return self._pending

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def load(self) -> WindowGeometry:
        if not self._path.exists():
            return FALLBACK_GEOMETRY
        try:
            return WindowGeometry.from_record(read_json(self._path))
        except (OSError, ValueError, StateFileError) as exc:
            _log.warning("window state unreadable, using fallback: %s", exc)
            return FALLBACK_GEOMETRY

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def schedule_save(self, geometry: WindowGeometry) -> float:
        """Replace any pending write and re-arm the quiet period. Returns the deadline."""
        deadline = self._clock() + self._delay
        self._pending = PendingWrite(deadline=deadline, geometry=geometry)
        return deadline

    def cancel(self) -> None:
        self._pending = None

    def poll(self, now: Optional[float] = None) -> bool:
        """Write the pending geometry if its quiet period has elapsed."""
        if self._pending is None:
            return False
        now = self._clock() if now is None else now
        if now < self._pending.deadline:
            return False
        geometry = self._pending.geometry
        self._pending = None
        self._write(geometry)
        return True

    def flush(self, geometry: WindowGeometry) -> None:
        """Window closing: drop any pending write, then write synchronously."""
        self.cancel()
        self._write(geometry)

    def remaining_ms(self, now: Optional[float] = None) -> Optional[int]:
        """Milliseconds until the pending write is due; None when idle."""
        if self._pending is None:
            return None
        now = self._clock() if now is None else now
        return max(0, math.ceil((self._pending.deadline - now) * 1000))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _write(self, geometry: WindowGeometry) -> None:
        try:
            self._writer(self._path, geometry.to_record())
        except OSError as exc:
            _log.warning("failed to save window state to %s: %s", self._path, exc)


def _as_int(value: Any) -> Optional[int]:
    """JSON number -> int. bool, NaN and infinities are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(round(value))
    return value
