"""Data access managers for the resource store.

Each module provides async functions that encapsulate row-level reads and
writes.  Managers accept ``AsyncSession`` as their first parameter, commit
their own writes, and convert driver failures into ``StoreFailureError`` --
deciding whether a missing row is an error is the handler's responsibility.
"""
