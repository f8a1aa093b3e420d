"""
Rate limiting for credential endpoints (login, register, refresh)
"""
import time
from collections import deque
from fastapi import Request, HTTPException
from typing import Deque, Dict, Optional
import logging

from quizzypop.config import settings

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    In-memory sliding-window rate limiter
    Single-process only: each worker counts its own requests
    """

    def __init__(self, requests_per_minute: int = 20, requests_per_hour: int = 200):
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour

        # {client_id: timestamps of accepted requests within the last hour}
        self.history: Dict[str, Deque[float]] = {}

    def _get_client_id(self, request: Request) -> str:
        """Client IP; credential endpoints are hit before anyone is authenticated"""
        return request.client.host if request.client else "unknown"

    def _cleanup_old_entries(self, now: float) -> None:
        """Drop timestamps older than an hour and forget clients with none left"""
        cutoff = now - 3600
        for client_id in list(self.history.keys()):
            history = self.history[client_id]
            while history and history[0] <= cutoff:
                history.popleft()

            # Remove empty entries
            if not history:
                del self.history[client_id]

    def hit(self, client_id: str, now: Optional[float] = None) -> Optional[int]:
        """
        Record one request for a client

        Returns:
            None if the request is allowed, otherwise the seconds to wait
        """
        now = time.time() if now is None else now
        self._cleanup_old_entries(now)
        history = self.history.get(client_id, deque())

        if len(history) >= self.requests_per_hour:
            return int(history[0] + 3600 - now) + 1

        last_minute = sum(1 for ts in history if ts > now - 60)
        if last_minute >= self.requests_per_minute:
            return 60

        history.append(now)
        self.history[client_id] = history
        return None

    def reset(self) -> None:
        self.history.clear()

    async def check_rate_limit(self, request: Request) -> None:
        """
        Raises:
            HTTPException: 429 if the client is over its minute or hour budget
        """
        client_id = self._get_client_id(request)
        retry_after = self.hit(client_id)
        if retry_after is None:
            return

        logger.warning(f"Rate limit exceeded on {request.url.path}: {client_id}")
        raise HTTPException(
            status_code=429,
            detail={
                "error": "rate_limit_exceeded",
                "message": (
                    f"Too many requests. Limit: {self.requests_per_minute} per minute, "
                    f"{self.requests_per_hour} per hour"
                ),
                "retry_after": retry_after
            },
            headers={"Retry-After": str(retry_after)}
        )


# Global instance
rate_limiter = RateLimiter(
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    requests_per_hour=settings.RATE_LIMIT_PER_HOUR
)
