"""Domain models.

Why:
- The result envelope every call returns lives here (Pydantic v2).
- The domain does not know about HTTP transports, only about results.
"""

from core.domain.results import PagedResults, ResultEnvelope, Results

__all__ = ["PagedResults", "ResultEnvelope", "Results"]
