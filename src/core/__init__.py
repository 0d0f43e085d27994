"""Core of the REST client base.

Why:
- Holds what does not depend on a concrete transport: configuration,
  errors, the result envelope and the transport acquisition contract.
"""
