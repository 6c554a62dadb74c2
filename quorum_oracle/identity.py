"""
Identity providers for oracle and capability instances.

An identity provider is any zero-argument callable returning a fresh,
globally unique string. The host normally supplies these; the providers
here cover in-process use and deterministic replays.
"""

import itertools
import uuid
from typing import Callable

IdentityProvider = Callable[[], str]


def uuid_identity() -> str:
    """Random 128-bit identity as 32 hex characters"""
    return uuid.uuid4().hex


class SequentialIdentity:
    """
    Deterministic identities: "<prefix>-1", "<prefix>-2", ...

    Unique only within one provider instance.
    """

    def __init__(self, prefix: str = "id", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"
