"""
BVH Browser - BVH motion capture parsing and playback.

This package parses Biovision Hierarchy files, samples world-space joint
transforms at any (fractional) frame, and loads many clips in the background
without blocking a render loop.

Main classes:
    - BVHClip: Parsed skeleton + motion, returned by parse()
    - AnimationState: Looping playback with pause and a cached pose
    - LoadQueue: Background loader feeding Slot objects

Example usage:
    from bvh_browser import LoadQueue, Slot, SlotState

    queue = LoadQueue()
    queue.start()

    slots = [Slot(path) for path in paths]
    for slot in slots:
        queue.enqueue(slot.name, slot)

    # Main loop
    while running:
        for slot in slots:
            if slot.state is SlotState.LOADED:
                slot.update(dt)
                pose = slot.animation.pose
                # pose.positions = (J, 3) world positions
                # pose.rotations = (J, 4) world rotations (wxyz quaternion)
                draw(slot.clip.skeleton, pose)

    # Cleanup
    queue.stop()
"""

from .animation import AnimationState, Pose, sample
from .bvh import BVHClip, Channel, Joint, MotionData, Skeleton, load_bvh_file, parse
from .errors import (
    BVHError,
    MalformedHierarchy,
    MissingSections,
    TruncatedMotionData,
    UnknownChannelToken,
)
from .loader import LoadQueue, LoadRequest, Slot, SlotState

__version__ = "0.1.0"
__all__ = [
    "AnimationState",
    "BVHClip",
    "BVHError",
    "Channel",
    "Joint",
    "LoadQueue",
    "LoadRequest",
    "MalformedHierarchy",
    "MissingSections",
    "MotionData",
    "Pose",
    "Skeleton",
    "Slot",
    "SlotState",
    "TruncatedMotionData",
    "UnknownChannelToken",
    "load_bvh_file",
    "parse",
    "sample",
]
