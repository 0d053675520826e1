from __future__ import annotations

import time
from threading import Lock


class RateLimiter:
  """Fixed-window counter per key, kept in process memory.

  Each replica counts on its own, so the effective limit scales with the
  number of API processes. Expired windows are swept at most once per
  window length.
  """

  def __init__(self, clock=time.monotonic) -> None:
    self._clock = clock
    self._lock = Lock()
    # key -> (window end, hits in window)
    self._windows: dict[str, tuple[float, int]] = {}
    self._next_sweep = 0.0

  def __len__(self) -> int:
    return len(self._windows)

  def _sweep(self, now: float, window_seconds: int) -> None:
    if now < self._next_sweep:
      return
    for key in [k for k, (ends_at, _) in self._windows.items() if now >= ends_at]:
      del self._windows[key]
    self._next_sweep = now + window_seconds

  def hit(self, key: str, *, limit: int, window_seconds: int) -> int:
    """Count one attempt; return 0 if allowed, else seconds until the window resets."""
    now = self._clock()
    with self._lock:
      self._sweep(now, window_seconds)
      ends_at, hits = self._windows.get(key, (0.0, 0))
      if now >= ends_at:
        self._windows[key] = (now + window_seconds, 1)
        return 0
      if hits >= limit:
        return max(1, int(ends_at - now))
      self._windows[key] = (ends_at, hits + 1)
      return 0

  def forget(self, prefix: str = "") -> None:
    with self._lock:
      for key in [k for k in self._windows if k.startswith(prefix)]:
        del self._windows[key]


limiter = RateLimiter()
