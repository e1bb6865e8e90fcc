import time


def monotonic_ms() -> float:
    """Default engine clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0
