"""
Persistence module.

Key-value stores that carry attempt state across reloads, the key scheme
that partitions them per attempt and typed access on top of both.
"""
