"""Exception types and the report-once helper for caller contract violations."""

import logging
import threading
from collections import OrderedDict
from typing import Hashable, List

log = logging.getLogger(__name__)

# Most recently reported keys; older ones may be reported again once evicted.
REPORTED_KEYS_MAX = 256

_reported: "OrderedDict[Hashable, None]" = OrderedDict()
_reported_lock = threading.Lock()


class FallsceneError(Exception):
    """Base class for every error raised by fallscene."""


class InvalidConfiguration(FallsceneError, ValueError):
    """Raised when user-supplied parameters fall outside their bounds."""

    def __init__(self, problems: List[str]) -> None:
        self.problems = list(problems)
        super().__init__("invalid configuration: " + "; ".join(self.problems))


class DegenerateViewport(FallsceneError, ValueError):
    """Zero or negative output dimensions / fps passed to the core."""


class AssetLoadError(FallsceneError):
    """An asset could not be fetched or decoded."""


def report_once(key: Hashable, message: str, *args) -> bool:
    """Log *message* as an error the first time *key* is seen.

    Returns True when the message was emitted.
    """
    with _reported_lock:
        if key in _reported:
            _reported.move_to_end(key)
            return False
        _reported[key] = None
        while len(_reported) > REPORTED_KEYS_MAX:
            _reported.popitem(last=False)
    log.error(message, *args)
    return True


def reset_reports() -> None:
    with _reported_lock:
        _reported.clear()
