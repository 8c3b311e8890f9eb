"""
Pose sampling and playback.

This module provides:
    - sampler: interpolation and forward kinematics to world space
    - state: looping playback with pause and a cached pose
"""

from .sampler import Pose, forward_kinematics, local_transforms, sample, world_transforms_all
from .state import DEFAULT_FRAME_TIME, AnimationState

__all__ = [
    "AnimationState",
    "DEFAULT_FRAME_TIME",
    "Pose",
    "forward_kinematics",
    "local_transforms",
    "sample",
    "world_transforms_all",
]
