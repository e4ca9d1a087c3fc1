"""Shared test doubles: memory cache backend and sample DSN declarations."""

from __future__ import annotations

from dsnreport.persistence.memory_backend import MemoryCacheBackend
from tests.fakes.dsn_samples import MINIMAL_DSN, NO_DATES_DSN, SAMPLE_DSN

__all__ = ["MemoryCacheBackend", "MINIMAL_DSN", "NO_DATES_DSN", "SAMPLE_DSN"]
