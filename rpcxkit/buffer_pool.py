"""Size-bucketed pools of reusable byte buffers."""

from __future__ import annotations

import math


class LevelPool:
    """A pool of buffers that all have the same capacity."""

    def __init__(self, size: int) -> None:
        self.size = size
        self._free: list[bytearray] = []

    def get(self) -> bytearray:
        return self._free.pop() if self._free else bytearray(self.size)

    def put(self, buf: bytearray) -> None:
        self._free.append(buf)


class LimitedPool:
    """Buffers from ``min_size`` to ``max_size`` bytes in power-of-two levels."""

    def __init__(self, min_size: int, max_size: int) -> None:
        if max_size < min_size:
            raise ValueError("maxSize can't be less than minSize")
        self.min_size = min_size
        self.max_size = max_size
        self.pools: list[LevelPool] = []
        size = min_size
        while size < max_size:
            self.pools.append(LevelPool(size))
            size *= 2
        self.pools.append(LevelPool(max_size))

    def _pick(self, size: int, rounding) -> LevelPool | None:
        idx = 0 if size <= 0 else max(rounding(math.log2(size / self.min_size)), 0)
        return self.pools[idx] if idx < len(self.pools) else None

    def find_pool(self, size: int) -> LevelPool | None:
        """Return the pool whose buffers can hold ``size`` bytes, if any."""
        if size > self.max_size:
            return None
        return self._pick(size, math.ceil)

    def find_put_pool(self, size: int) -> LevelPool | None:
        """Return the pool a buffer of capacity ``size`` goes back to, if any."""
        if size > self.max_size or size < self.min_size:
            return None
        return self._pick(size, math.floor)

    def get(self, size: int) -> memoryview:
        """Return a view of exactly ``size`` bytes over a pooled buffer."""
        pool = self.find_pool(size)
        base = bytearray(size) if pool is None else pool.get()
        return memoryview(base)[:size]

    def put(self, buf: memoryview | bytearray) -> None:
        """Give a buffer back; buffers of unsuitable capacity are dropped."""
        base = buf.obj if isinstance(buf, memoryview) else buf
        pool = self.find_put_pool(len(base)) if isinstance(base, bytearray) else None
        if pool is not None:
            pool.put(base)