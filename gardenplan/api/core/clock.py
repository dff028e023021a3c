from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_clock() -> Clock:
    """
    Dependency providing the current-time source

    Tests override this to pin "now" to a fixed instant.
    """
    return utc_now
