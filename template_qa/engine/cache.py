"""
Validation result cache - in-process, TTL-bounded, size-bounded.

Keys combine a stable hash of the template document with the policy rule-set
version, so replacing the rules never serves a result computed under the old
rules.
"""

import hashlib
import json
import threading
import time
from collections import OrderedDict
from typing import Optional

from template_qa import config
from template_qa.engine.models import ValidationResult
from template_qa.logging_config import get_engine_logger

logger = get_engine_logger("cache")


def hash_template(template: dict) -> str:
    """SHA-256 of the document serialized with sorted keys."""
    normalized = json.dumps(template, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


class ValidationCache:

    def __init__(self, ttl_seconds: int = None, max_entries: int = None, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds or config.VALIDATION_CACHE_TTL_SECONDS
        self.max_entries = max_entries or config.VALIDATION_CACHE_MAX_ENTRIES
        self._clock = clock
        self._entries = OrderedDict()  # key -> (expires_at, ValidationResult)
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(template: dict, rules_version: int) -> str:
        return f"{rules_version}:{hash_template(template)}"

    def get(self, template: dict, rules_version: int) -> Optional[ValidationResult]:
        key = self.make_key(template, rules_version)
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry[0] <= now:
                if entry is not None:
                    del self._entries[key]
                self.misses += 1
                return None
            self.hits += 1
            result = entry[1]
        logger.debug("Validation cache hit: %s", key[:24])
        return result.copy()

    def set(self, template: dict, rules_version: int, result: ValidationResult):
        key = self.make_key(template, rules_version)
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl_seconds, result.copy())
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict:
        with self._lock:
            return {"hits": self.hits, "misses": self.misses, "size": len(self._entries)}
