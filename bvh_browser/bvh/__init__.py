"""
BVH reading: skeleton hierarchy, motion channels and the top-level parser.
"""

from .motion import MotionData, read_motion
from .parser import BVHClip, load_bvh_file, parse
from .skeleton import Channel, Joint, Skeleton, SkeletonParser

__all__ = [
    "BVHClip",
    "Channel",
    "Joint",
    "MotionData",
    "Skeleton",
    "SkeletonParser",
    "load_bvh_file",
    "parse",
    "read_motion",
]
