"""Timing utilities for performance measurement."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Callable, Generator, Tuple


@contextmanager
def timer() -> Generator[Callable[[], float], None, None]:
    """Yield a callable returning the seconds elapsed since entering the block."""
    start_time = time.perf_counter()

    def get_elapsed() -> float:
        return time.perf_counter() - start_time

    yield get_elapsed


def time_function(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Tuple[Any, float]:
    """Time a function execution and return (result, duration)."""
    start_time = time.perf_counter()
    result = func(*args, **kwargs)
    return result, time.perf_counter() - start_time
