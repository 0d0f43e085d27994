"""Adapters: HTTP I/O.

Why here:
- Everything that talks to the network (client factory, request engine,
  generic JSON client) lives in adapters; the core stays transport free.
"""
