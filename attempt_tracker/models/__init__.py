"""
Data models and contracts module.

Immutable data structures for attempt identities, persisted attempt
records and submission records.
"""
