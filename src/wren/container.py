"""Application-scoped namespaced store.

The container memoizes expensive one-time setup, chiefly the validated
merge of framework and application registries, so that managers built
once per request do not re-validate configuration.

It is constructed explicitly by ``Application`` at process start and
handed to every manager that needs it. There is no module-level instance.

Thread safety:
    Plain ``get``/``set``/``has`` rely on dict operations being atomic.
    ``memoize`` performs check-then-populate under a lock scoped to one
    ``(namespace, key)`` pair, with a lock-free fast path once populated.
"""

import threading
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

_MISSING = object()


class ApplicationContainer:
    """Namespaced key/value store living for the lifetime of the process.

    Usage::

        container = ApplicationContainer()
        container.set("view_helpers", "registry", merged)
        container.get("view_helpers", "registry")
    """

    __slots__ = ("_guard", "_locks", "_store")

    def __init__(self) -> None:
        self._store: dict[str, dict[str, Any]] = {}
        self._locks: dict[tuple[str, str], threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, namespace: str, key: str, default: Any = None) -> Any:
        """Return the stored value, or *default* when absent."""
        return self._store.get(namespace, {}).get(key, default)

    def set(self, namespace: str, key: str, value: Any) -> "ApplicationContainer":
        self._store.setdefault(namespace, {})[key] = value
        return self

    def has(self, namespace: str, key: str) -> bool:
        return key in self._store.get(namespace, {})

    def remove(self, namespace: str, key: str) -> bool:
        """Remove a key. Returns ``True`` if it was present."""
        entries = self._store.get(namespace)
        if entries is None or key not in entries:
            return False
        del entries[key]
        return True

    def keys(self, namespace: str) -> list[str]:
        return list(self._store.get(namespace, {}))

    def clear(self, namespace: str | None = None) -> "ApplicationContainer":
        """Drop one namespace, or everything when *namespace* is ``None``."""
        if namespace is None:
            self._store.clear()
        else:
            self._store.pop(namespace, None)
        return self

    def memoize(self, namespace: str, key: str, compute: Callable[[], T]) -> T:
        """Return the stored value, computing and storing it on first use.

        *compute* runs at most once per ``(namespace, key)`` as long as it
        succeeds. If it raises, nothing is stored and the exception
        propagates, so the next caller retries the same computation.
        """
        value = self._store.get(namespace, {}).get(key, _MISSING)
        if value is not _MISSING:
            return value

        with self._lock_for(namespace, key):
            value = self._store.get(namespace, {}).get(key, _MISSING)
            if value is _MISSING:
                value = compute()
                self.set(namespace, key, value)
        return value

    def _lock_for(self, namespace: str, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get((namespace, key))
            if lock is None:
                lock = self._locks[(namespace, key)] = threading.Lock()
            return lock

    def __repr__(self) -> str:
        namespaces = ", ".join(f"{ns}={len(v)}" for ns, v in self._store.items())
        return f"<ApplicationContainer {namespaces}>"
