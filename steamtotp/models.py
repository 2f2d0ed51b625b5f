from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeOffset:
    offset: int = None
    latency: int = None
