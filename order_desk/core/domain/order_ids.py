"""Utilities for opaque order identifiers."""

from __future__ import annotations

import hashlib
import itertools
import threading
import uuid


def stable_order_id(namespace: str, sequence: int) -> str:
    """Return a stable opaque id for the ``sequence``-th order of a namespace.

    The returned value is a 16-char lowercase hex string derived from a
    blake2b digest. The namespace makes the mapping explicit and versionable,
    so replaying the same scenario yields the same ids.
    """
    if not namespace:
        raise ValueError("namespace must be non-empty")
    if sequence < 0:
        raise ValueError("sequence must be >= 0")

    payload = f"{namespace}:{sequence}".encode("utf-8")
    return hashlib.blake2b(payload, digest_size=8).hexdigest()


def random_order_id() -> str:
    """Default id factory: a random UUID4 hex string."""
    return uuid.uuid4().hex


class OrderIdGenerator:
    """Callable id factory producing ``stable_order_id`` values in sequence."""

    def __init__(self, namespace: str) -> None:
        if not namespace:
            raise ValueError("namespace must be non-empty")
        self._namespace = namespace
        self._counter = itertools.count()
        self._lock = threading.Lock()

    @property
    def namespace(self) -> str:
        return self._namespace

    def __call__(self) -> str:
        with self._lock:
            sequence = next(self._counter)
        return stable_order_id(self._namespace, sequence)
