import hashlib
import time
from collections import defaultdict
from typing import DefaultDict, List

IDENTIFIER_HASH_LENGTH = 64


class SoftRateLimiter:
    """Sliding-window failure counter keyed by an opaque string."""

    def __init__(self, max_attempts: int, window_seconds: int) -> None:
        if max_attempts <= 0:
            raise ValueError("max_attempts must be greater than 0")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be greater than 0")
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._attempts: DefaultDict[str, List[float]] = defaultdict(list)

    def _prune(self, key: str, now: float) -> List[float]:
        cutoff = now - self.window_seconds
        attempts = [ts for ts in self._attempts.get(key, []) if ts >= cutoff]
        if attempts:
            self._attempts[key] = attempts
        else:
            self._attempts.pop(key, None)
        return attempts

    def is_limited(self, key: str, now: float | None = None) -> bool:
        current = time.time() if now is None else now
        attempts = self._prune(key, current)
        return len(attempts) >= self.max_attempts

    def record_failure(self, key: str, now: float | None = None) -> None:
        current = time.time() if now is None else now
        attempts = self._prune(key, current)
        attempts.append(current)
        self._attempts[key] = attempts

    def reset(self, key: str) -> None:
        self._attempts.pop(key, None)

    def clear(self) -> None:
        self._attempts.clear()


def login_key(email: str) -> str:
    identifier = email.strip().lower()
    identifier_hash = hashlib.sha256(identifier.encode()).hexdigest()
    return f"login:{identifier_hash[:IDENTIFIER_HASH_LENGTH]}"
