"""Connection providers: where a ``Connection`` gets its driver handle.

``StandaloneProvider`` opens a fresh session per acquire.  ``PooledProvider``
is the persistent-connection cache: one ``oracledb`` pool per distinct set of
connect parameters, shared by every ``Connection`` in the process that uses
the same provider.  ``persistent_provider`` is the instance used when a
``Connection`` is built with ``persistent=True``.
"""

from __future__ import annotations

import threading
from typing import Any

import oracledb

from oraspine.core.logging import get_logger
from oraspine.core.protocols import DriverHandle

from .types import ConnectParams

logger = get_logger(__name__)


class StandaloneProvider:
    """One dedicated session per ``acquire``; ``release`` closes it."""

    def acquire(self, params: ConnectParams) -> DriverHandle:
        return oracledb.connect(
            user=params.username,
            password=params.password,
            dsn=params.dsn,
            mode=int(params.auth_mode),
        )

    def release(self, handle: DriverHandle) -> None:
        handle.close()


class PooledProvider:
    """
    Process-wide cache of ``oracledb`` session pools.

    Pools are created lazily on the first ``acquire`` for a given
    ``ConnectParams.pool_key()`` and live until ``close_all()``.
    """

    def __init__(self, *, min_size: int = 1, max_size: int = 4, increment: int = 1):
        self.min_size = min_size
        self.max_size = max_size
        self.increment = increment
        self._pools: dict[tuple, Any] = {}
        self._owners: dict[int, Any] = {}
        self._lock = threading.Lock()

    @property
    def pool_count(self) -> int:
        """Number of cached pools."""
        return len(self._pools)

    def _get_pool(self, params: ConnectParams) -> Any:
        key = params.pool_key()
        with self._lock:
            pool = self._pools.get(key)
            if pool is None:
                pool = oracledb.create_pool(
                    user=params.username,
                    password=params.password,
                    dsn=params.dsn,
                    mode=int(params.auth_mode),
                    min=self.min_size,
                    max=self.max_size,
                    increment=self.increment,
                )
                self._pools[key] = pool
                logger.info(
                    "pool_created",
                    dsn=params.dsn,
                    username=params.username,
                    min=self.min_size,
                    max=self.max_size,
                )
            return pool

    def acquire(self, params: ConnectParams) -> DriverHandle:
        pool = self._get_pool(params)
        handle = pool.acquire()
        with self._lock:
            self._owners[id(handle)] = pool
        return handle

    def release(self, handle: DriverHandle) -> None:
        with self._lock:
            pool = self._owners.pop(id(handle), None)
        if pool is None:
            # Not issued by this provider (or its pool was closed)
            handle.close()
            return
        pool.release(handle)

    def close_all(self) -> None:
        """Close every cached pool, including sessions still borrowed."""
        with self._lock:
            pools = list(self._pools.values())
            self._pools.clear()
            self._owners.clear()
        for pool in pools:
            pool.close(force=True)
        logger.info("pools_closed", count=len(pools))


persistent_provider = PooledProvider()


__all__ = [
    "StandaloneProvider",
    "PooledProvider",
    "persistent_provider",
]
