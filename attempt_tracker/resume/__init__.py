"""
Resume module.

Seeds the attempt store so that the next mount of a challenge continues
an earlier, unfinished solution instead of starting from zero.
"""

from .trigger import ResumeTrigger

__all__ = ["ResumeTrigger"]
