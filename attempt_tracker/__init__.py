"""
Attempt Tracker - Resumable Timed-Attempt Tracking

Measures how long a learner spends on a block-based coding challenge,
survives reloads and navigation through a durable key-value store,
supports resuming an earlier solution and reports the final elapsed
time when the attempt is submitted for grading.
"""

__version__ = "0.1.0"
__author__ = "Attempt Tracker Team"
