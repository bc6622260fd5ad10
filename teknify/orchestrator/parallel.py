"""Parallel upload utilities."""
import os


def default_concurrency() -> int:
    """Number of simultaneous uploads when none is requested: one per CPU."""
    return os.cpu_count() or 1
