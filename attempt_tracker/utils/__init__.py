"""
Utility functions module.

Time Semantics:
- All timestamps are integer milliseconds since the Unix epoch
- The clock is an injected capability; client wall-clock time is trusted
- Durations are integer milliseconds and rendered as HH:MM:SS
"""
