"""Human-readable renderings of timer durations."""

from __future__ import annotations

import math


def _whole_seconds(seconds: float) -> int:
    """Round to the nearest second, halves away from zero, clamping negatives."""
    return int(math.floor(max(seconds, 0.0) + 0.5))


def formatted_timer(seconds: float) -> str:
    """Format as HH:MM:SS, e.g. ``01:02:03``."""
    total = _whole_seconds(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def formatted_countdown(seconds: float) -> str:
    """Format as MM:SS, switching to HH:MM:SS once a full hour remains."""
    total = _whole_seconds(seconds)
    minutes, secs = divmod(total, 60)
    if minutes >= 60:
        hours, minutes = divmod(minutes, 60)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def formatted_duration(seconds: float) -> str:
    """Coarse summary using the two most significant units: 1h 5m, 4m 10s, 42s."""
    total = _whole_seconds(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
