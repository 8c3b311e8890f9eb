"""
Background loading of BVH clips into viewer slots.
"""

from .load_queue import DEFAULT_POLL_INTERVAL, LoadQueue, LoadRequest, Slot, SlotState, read_source

__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "LoadQueue",
    "LoadRequest",
    "Slot",
    "SlotState",
    "read_source",
]
