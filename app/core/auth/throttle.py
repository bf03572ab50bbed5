from collections import defaultdict, deque
from threading import Lock
from typing import Deque, Dict, Optional
import logging
import time

from fastapi import HTTPException, status

from app.config.settings import settings

logger = logging.getLogger(__name__)


class LoginThrottledError(HTTPException):
    def __init__(self, retry_after: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Demasiados intentos de inicio de sesión. Intente nuevamente más tarde",
            headers={"Retry-After": str(retry_after)},
        )


class LoginThrottle:
    """
    Ventana deslizante de intentos de login por clave (IP + email).

    Cuenta todos los intentos, exitosos o no. El estado vive en memoria del
    proceso.
    """

    def __init__(self, limit: int, ttl: int):
        self.limit = limit
        self.ttl = ttl
        self._attempts: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = Lock()

    def hit(self, key: str, now: Optional[float] = None) -> None:
        now = time.monotonic() if now is None else now

        with self._lock:
            attempts = self._attempts[key]
            while attempts and now - attempts[0] >= self.ttl:
                attempts.popleft()

            if len(attempts) >= self.limit:
                retry_after = int(self.ttl - (now - attempts[0])) + 1
                logger.warning(f"Login limitado para {key}, reintentar en {retry_after}s")
                raise LoginThrottledError(retry_after)

            attempts.append(now)

    def reset(self) -> None:
        with self._lock:
            self._attempts.clear()


login_throttle = LoginThrottle(settings.login_throttle_limit, settings.login_throttle_ttl)
