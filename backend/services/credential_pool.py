"""Round-robin API key rotation with per-key health.

Each key tracks consecutive errors and, after a rate limit, a cooldown
deadline. Selection skips keys that are still cooling down. All state sits
behind one lock so concurrent evaluations can share a pool.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from services.errors import CredentialsExhaustedError

logger = logging.getLogger(__name__)


@dataclass
class CredentialHealth:
    error_count: int = 0
    rate_limited_until: float = 0.0


class CredentialPool:
    def __init__(
        self,
        keys: list[str],
        cooldown_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        # de-duplicate, keep configured order
        self._keys = list(dict.fromkeys(k for k in keys if k))
        self._health = {key: CredentialHealth() for key in self._keys}
        self._cooldown = cooldown_seconds
        self._clock = clock
        self._next = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def enabled(self) -> bool:
        return bool(self._keys)

    def acquire(self) -> str:
        """Next key in rotation that is not cooling down.

        Raises CredentialsExhaustedError when no key is usable right now.
        """
        with self._lock:
            if not self._keys:
                raise CredentialsExhaustedError("No API keys configured")

            now = self._clock()
            for offset in range(len(self._keys)):
                index = (self._next + offset) % len(self._keys)
                key = self._keys[index]
                if self._health[key].rate_limited_until <= now:
                    self._next = (index + 1) % len(self._keys)
                    return key

            raise CredentialsExhaustedError(
                f"All {len(self._keys)} API key(s) are rate-limited"
            )

    def report_success(self, key: str) -> None:
        with self._lock:
            health = self._health.get(key)
            if health is not None:
                health.error_count = 0
                health.rate_limited_until = 0.0

    def report_failure(self, key: str, rate_limited: bool = False) -> None:
        with self._lock:
            health = self._health.get(key)
            if health is None:
                return
            health.error_count += 1
            if rate_limited:
                health.rate_limited_until = self._clock() + self._cooldown
                logger.warning(
                    "API key #%d rate-limited, cooling down for %.0fs",
                    self._keys.index(key) + 1,
                    self._cooldown,
                )

    def health(self, key: str) -> CredentialHealth:
        with self._lock:
            current = self._health[key]
            return CredentialHealth(current.error_count, current.rate_limited_until)

    def available_count(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for h in self._health.values() if h.rate_limited_until <= now)
