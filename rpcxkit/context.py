"""A context that carries several values guarded by a lock."""

from __future__ import annotations

import threading
from collections.abc import Hashable, Mapping
from typing import Any

from rpcxkit.share import CONTEXT_TAGS_LOCK

_IS_SHARE_CONTEXT = "_isShareContext"


def _lookup(source: Any, key: Any) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(key)
    return source.value(key)


def _check_key(key: Any) -> None:
    if key is None:
        raise ValueError("nil key")
    if not isinstance(key, Hashable):
        raise TypeError("key is not comparable")
    try:
        hash(key)
    except TypeError as exc:
        raise TypeError("key is not comparable") from exc


class Context:
    """A context holding its own tags and falling back to a parent for lookups.

    The parent may be ``None``, a mapping, or any object with a ``value(key)`` method.
    """

    def __init__(self, parent: Any = None, tags: Mapping[Any, Any] | None = None) -> None:
        self.parent = parent
        self.tags: dict[Any, Any] = dict(tags) if tags is not None else {}
        self._lock = threading.Lock()

    def lock(self) -> None:
        """Acquire the tags lock."""
        self._lock.acquire()

    def unlock(self) -> None:
        """Release the tags lock."""
        self._lock.release()

    def __enter__(self) -> Context:
        self.lock()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unlock()

    def value(self, key: Any) -> Any:
        """Return the value for ``key`` from the tags, else from the parent."""
        with self._lock:
            if key in self.tags:
                return self.tags[key]
            return _lookup(self.parent, key)

    def set_value(self, key: Any, val: Any) -> None:
        """Store ``val`` under ``key`` in this context's tags."""
        with self._lock:
            self.tags[key] = val

    def delete_key(self, key: Any) -> None:
        """Remove ``key`` from the tags; a missing or ``None`` key is ignored."""
        if key is None:
            return
        with self._lock:
            self.tags.pop(key, None)

    def __str__(self) -> str:
        parent = "background" if self.parent is None else str(self.parent)
        return f"{parent}.WithValue({self.tags})"


def new_context(parent: Any = None) -> Context:
    """Create a shared context over ``parent`` whose lock is reachable as a value."""
    tags_lock = threading.Lock()
    inner = Context(parent, {CONTEXT_TAGS_LOCK: tags_lock})
    ctx = Context(inner, {_IS_SHARE_CONTEXT: True})
    ctx._lock = tags_lock
    return ctx


def with_value(parent: Any, key: Any, val: Any) -> Context:
    """Return a new context over ``parent`` holding ``key`` mapped to ``val``."""
    _check_key(key)
    return Context(parent, {key: val})


def with_local_value(ctx: Context, key: Any, val: Any) -> Context:
    """Store ``key`` mapped to ``val`` in ``ctx`` itself and return it."""
    _check_key(key)
    ctx.set_value(key, val)
    return ctx


def is_share_context(ctx: Any) -> bool:
    """Tell whether ``ctx`` is, or wraps, a context made by :func:`new_context`."""
    return _lookup(ctx, _IS_SHARE_CONTEXT) is not None