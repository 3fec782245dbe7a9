# huff/registry.py

import dataclasses
import logging

from django.conf import settings
from django.core.cache import caches

from huff.records import utcnow

logger = logging.getLogger(__name__)


class OperationRegistry:
    """Progress and result records keyed by operation id.

    Records live in a Django cache backend, so expiry and the entry bound are
    the backend's (``HUFF_OPERATION_TTL`` seconds, ``MAX_ENTRIES``). Each id
    has a single writer, the operation that created it; readers only poll.
    """

    progress_prefix = "huff:progress:"
    result_prefix = "huff:result:"

    def __init__(self, cache=None, timeout=None):
        self._cache = cache
        self._timeout = timeout

    @property
    def cache(self):
        if self._cache is None:
            self._cache = caches[settings.HUFF_OPERATION_CACHE]
        return self._cache

    @property
    def timeout(self):
        ttl = self._timeout
        if ttl is None:
            ttl = settings.HUFF_OPERATION_TTL
        # django treats None as "never expire"
        return ttl or None

    # ---------------------- Progress ----------------------

    def start(self, progress):
        self.cache.set(self.progress_prefix + progress.operation_id, progress, self.timeout)
        return progress

    def get_progress(self, operation_id):
        return self.cache.get(self.progress_prefix + operation_id)

    def update(self, operation_id, **changes):
        """Apply ``changes`` to a live record and return the new record.

        Terminal records are left alone and returned unchanged; unknown ids
        return None.
        """
        current = self.get_progress(operation_id)
        if current is None:
            return None
        if current.is_complete:
            logger.debug("Ignoring update for finished operation %s", operation_id)
            return current

        changes.setdefault("last_updated", utcnow())
        updated = dataclasses.replace(current, **changes)
        self.cache.set(self.progress_prefix + operation_id, updated, self.timeout)
        return updated

    # ---------------------- Results ----------------------

    def save_result(self, result):
        self.cache.set(self.result_prefix + result.operation_id, result, self.timeout)

    def get_result(self, operation_id):
        return self.cache.get(self.result_prefix + operation_id)

    def remove(self, operation_id):
        self.cache.delete_many(
            [self.progress_prefix + operation_id, self.result_prefix + operation_id]
        )
