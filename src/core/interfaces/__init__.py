"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- Inverts dependencies: the request engine depends on abstractions.
"""

from core.interfaces.client_source import ClientSource

__all__ = ["ClientSource"]
