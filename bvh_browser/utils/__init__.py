"""
Utility functions for BVH parsing and playback.

This module provides:
    - text_cursor: scanning of raw BVH text
    - quat_utils: Quaternion math utilities
"""

from .quat_utils import euler_to_quat, quat_mul_batch, quat_mul_vec_batch, quat_normalize, quat_slerp
from .text_cursor import TextCursor

__all__ = [
    "TextCursor",
    "euler_to_quat",
    "quat_mul_batch",
    "quat_mul_vec_batch",
    "quat_normalize",
    "quat_slerp",
]
