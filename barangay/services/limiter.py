import threading
import time

from fastapi import HTTPException, Request

from barangay.core.config import Settings


class RateLimiter:
    def __init__(self, config: Settings, window_seconds: int = 60):
        """
        Sliding-window limiter for login attempts, keyed by client IP

        :param config: settings carrying RATE_LIMIT_ENABLED and the per-minute cap
        :param window_seconds: length of the counting window
        """
        self.config = config
        self.window_seconds = window_seconds
        self._requests = {}  # Stores IP -> [timestamp1, timestamp2...]
        self._lock = threading.Lock()

    def check(self, request: Request):
        if not self.config.RATE_LIMIT_ENABLED:
            return

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()

        with self._lock:
            # Drop attempts outside the window
            recent = [t for t in self._requests.get(client_ip, []) if now - t < self.window_seconds]

            if len(recent) >= self.config.MAX_LOGIN_ATTEMPTS_PER_MINUTE:
                self._requests[client_ip] = recent
                raise HTTPException(status_code=429, detail="Too many login attempts. Please wait.")

            recent.append(now)
            self._requests[client_ip] = recent
