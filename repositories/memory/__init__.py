"""
repositories/memory/ - In-process backend
=========================================
Repositories over a shared MemoryDatabase. Referential integrity, cascades
and vote uniqueness are enforced here rather than by a database engine.
"""
