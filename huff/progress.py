# huff/progress.py

import enum
import logging

logger = logging.getLogger(__name__)


class OperationStatus(enum.Enum):
    QUEUED = "QUEUED"
    READING_FILE = "READING_FILE"
    BUILDING_FREQUENCY_TABLE = "BUILDING_FREQUENCY_TABLE"
    BUILDING_HUFFMAN_TREE = "BUILDING_HUFFMAN_TREE"
    GENERATING_CODES = "GENERATING_CODES"
    ENCODING = "ENCODING"
    DECODING = "DECODING"
    WRITING_OUTPUT = "WRITING_OUTPUT"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self):
        return self in (OperationStatus.COMPLETED, OperationStatus.FAILED)


def safe_deliver(callback, *args):
    """Call an advisory callback; a failing callback is logged, never raised."""
    if callback is None:
        return
    try:
        callback(*args)
    except Exception:
        logger.warning("Progress callback %r failed, ignoring", callback, exc_info=True)


class ProgressNotifier:
    """Forwards (status, phase, percent) milestones to an optional sink.

    Percentages are clamped to [0, 100] and never go backwards within one
    notifier, whatever the caller passes in.
    """

    def __init__(self, sink=None):
        self.sink = sink
        self.percent = 0

    def __call__(self, status, phase, percent):
        self.percent = max(self.percent, min(100, max(0, int(percent))))
        logger.debug("%s: %s (%d%%)", status.value, phase, self.percent)
        safe_deliver(self.sink, status, phase, self.percent)
