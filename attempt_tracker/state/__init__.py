"""
Timer state machine module.

Manages the attempt timer lifecycle UNINITIALIZED → RUNNING → FINALIZED,
reconstructs a running attempt after a reload and finalizes it on submit.
"""
