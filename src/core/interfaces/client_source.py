"""Transport acquisition contract.

Why a Protocol:
- A structural contract (duck typing) instead of an abstract method on the
  request engine.
- Factory-backed and fixed transports become interchangeable and easy to
  replace in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class ClientSource(Protocol):
    """Hands out the HTTP client used for one call.

    Design rules:
    - The request engine borrows the client for the duration of a call and
      never closes it.
    - Whoever built the client owns its lifecycle.
    """

    def get_client(self) -> httpx.AsyncClient:
        """Return the client to use for the next call."""

        ...
