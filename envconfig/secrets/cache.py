"""Write-once memoization tables used by the secrets client."""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional

from envconfig.secrets.exceptions import SecretError
from envconfig.utils.logging import get_logger
from monitoring import Metrics

logger = get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """
    Outcome of one resolution attempt: either a value or an error.

    Entries are immutable. Once stored for a key, the same entry is returned
    for the rest of the run, whether it holds a value or a failure.
    """

    value: Any = None
    error: Optional[SecretError] = None

    @classmethod
    def success(cls, value: Any) -> "CacheEntry":
        return cls(value=value)

    @classmethod
    def failure(cls, error: SecretError) -> "CacheEntry":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            # Drop frames left by earlier raises of this same instance
            raise self.error.with_traceback(None)
        return self.value


class CacheTable:
    """
    A key -> CacheEntry table guarded by its own lock.

    Usage:
        sessions = CacheTable("sessions")
        entry = sessions.get_or_create("us-east-1", lambda: make_session())
        session = entry.unwrap()
    """

    def __init__(self, name: str):
        self.name = name
        self._entries: Dict[Hashable, CacheEntry] = {}
        self._lock = threading.Lock()

    def get_or_create(self, key: Hashable, factory: Callable[[], Any]) -> CacheEntry:
        """
        Return the entry for key, running factory once if there is none.

        A value returned by factory is stored as a success and a SecretError
        raised by it is stored as a failure. Any other exception propagates
        and leaves the table unchanged.

        The lock is held while factory runs, so concurrent callers asking for
        the same key wait for the first attempt instead of repeating it.
        factory must not call back into this same table.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                Metrics.cache_lookup(self.name, hit=True)
                logger.debug(f"Cache hit in '{self.name}' for '{key}'")
                return entry

            Metrics.cache_lookup(self.name, hit=False)
            try:
                entry = CacheEntry.success(factory())
            except SecretError as e:
                entry = CacheEntry.failure(e)

            self._entries[key] = entry
            return entry

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
