import time
import asyncio
import logging
from collections import deque
from typing import Callable, Iterable
from fastapi import Request
from fastapi.responses import JSONResponse
from jose import jwt, JWTError
from posadmin.auth.cookies import COOKIE_NAME
from posadmin.utils.security import ALGORITHM

logger = logging.getLogger(__name__)

DEFAULT_GUARDED_PREFIXES = ("/api/auth/login", "/api/auth/register", "/api/upload")


class RateLimitMiddleware:
    """Sliding-window limiter applied to credential and upload endpoints."""

    def __init__(
        self,
        app,
        *,
        window_seconds: int,
        max_calls: int,
        key_func: Callable[[Request], str],
        include_path_prefixes: Iterable[str] = DEFAULT_GUARDED_PREFIXES,
    ):
        self.app = app
        self.window = window_seconds
        self.max_calls = max_calls
        self.key_func = key_func
        self.guarded = tuple(include_path_prefixes)

        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = 0.0
        self._lock = asyncio.Lock()

    async def _register_hit(self, key: str, now: float) -> int | None:
        """Record a call for ``key``; returns seconds to wait when over the limit."""
        async with self._lock:
            if now - self._last_sweep >= self.window:
                self._sweep(now)
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] < now - self.window:
                hits.popleft()
            if len(hits) >= self.max_calls:
                return max(1, int(hits[0] + self.window - now))
            hits.append(now)
            return None

    def _sweep(self, now: float) -> None:
        # drop keys with no hit inside the window
        cutoff = now - self.window
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] < cutoff]:
            del self._hits[key]
        self._last_sweep = now

    async def __call__(self, scope, receive, send):
        path = scope.get("path", "")
        if scope["type"] != "http" or not path.startswith(self.guarded):
            return await self.app(scope, receive, send)

        key = self.key_func(Request(scope, receive=receive))
        retry_after = await self._register_hit(key, time.time())
        if retry_after is None:
            return await self.app(scope, receive, send)

        logger.warning("Rate limit hit for %s on %s", key, path)
        resp = JSONResponse(
            status_code=429,
            content={
                "error": "Too many requests",
                "windowSeconds": self.window,
                "maxCalls": self.max_calls,
                "tryAgainIn": retry_after,
            },
            headers={"Retry-After": str(retry_after)},
        )
        await resp(scope, receive, send)


def _session_subject(token: str, secret_key: str) -> str | None:
    try:
        return jwt.decode(token, secret_key, algorithms=[ALGORITHM]).get("sub")
    except JWTError:
        return None

def make_key_func(secret_key: str) -> Callable[[Request], str]:
    """Key by session subject when the caller has a valid token, else by client ip."""
    def _key(req: Request) -> str:
        auth = req.headers.get("authorization", "")
        if auth.lower().startswith("bearer "):
            token = auth.split(" ", 1)[1].strip()
        else:
            token = req.cookies.get(COOKIE_NAME)

        sub = _session_subject(token, secret_key) if token else None
        if sub:
            return f"user:{sub}"
        ip = req.client.host if req.client else "unknown"
        return f"ip:{ip}"
    return _key
