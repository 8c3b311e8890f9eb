"""
MOTION section decoder.

Reads the frame header and the per-frame channel values, and converts each
joint's declared channels into a local transform (translation + quaternion).
"""

import numpy as np

from ..errors import MissingSections, TruncatedMotionData
from ..utils.quat_utils import euler_to_quat

# Euler angle slots in the composition order qZ * qX * qY
_ROTATION_SLOT = {2: 0, 0: 1, 1: 2}


class MotionData:
    """Per-frame local transforms for every joint of a skeleton."""

    def __init__(self, positions, rotations, channels, frame_time, layout):
        """
        Args:
            positions: local translations (F, J, 3) taken from position channels
            rotations: local quaternions (F, J, 4) in (w, x, y, z) format
            channels: raw channel values (F, C) as read from the file
            frame_time: seconds per frame
            layout: per joint list of (column, Channel) pairs into `channels`
        """
        self.positions = positions
        self.rotations = rotations
        self.channels = channels
        self.frame_time = frame_time
        self.layout = layout

    @property
    def frame_count(self):
        return self.positions.shape[0]

    @property
    def joint_count(self):
        return self.positions.shape[1]

    def channel_values(self, joint, frame):
        """
        Declared channel values of one joint at one frame.

        Returns:
            Dict mapping Channel to its raw value (degrees for rotations)
        """
        row = self.channels[frame]
        return {channel: float(row[col]) for col, channel in self.layout[joint]}


def channel_layout(skeleton):
    """Assign each joint's channels consecutive columns in frame order."""
    layout = []
    col = 0
    for joint in skeleton.joints:
        entries = []
        for channel in joint.channels:
            entries.append((col, channel))
            col += 1
        layout.append(entries)
    return layout


def decode_channels(raw, skeleton, layout):
    """
    Convert raw channel values into local translations and rotations.

    Args:
        raw: channel values (F, C)
        skeleton: Skeleton the values were read for
        layout: output of channel_layout()

    Returns:
        Tuple of (positions (F, J, 3), rotations (F, J, 4))
    """
    frames = raw.shape[0]
    joints = len(skeleton)
    positions = np.zeros((frames, joints, 3))
    euler = np.zeros((frames, joints, 3))

    for j, entries in enumerate(layout):
        for col, channel in entries:
            if channel.is_rotation:
                euler[:, j, _ROTATION_SLOT[channel.axis]] = raw[:, col]
            else:
                positions[:, j, channel.axis] = raw[:, col]

    rotations = euler_to_quat(np.radians(euler), order='zxy')
    return positions, rotations


def read_motion(cursor, skeleton):
    """
    Read a MOTION section. The cursor must sit just after the MOTION keyword.

    Args:
        cursor: TextCursor over the file text
        skeleton: the already parsed Skeleton

    Returns:
        MotionData
    """
    cursor.whitespace()
    if not cursor.word("Frames:"):
        raise MissingSections("MOTION section lacks a 'Frames:' header", cursor.i)
    frame_count = cursor.read_int()
    if frame_count is None or frame_count < 0:
        raise MissingSections("'Frames:' header lacks a frame count", cursor.i)

    cursor.whitespace()
    if not cursor.word("Frame Time:"):
        raise MissingSections("MOTION section lacks a 'Frame Time:' header", cursor.i)
    frame_time = cursor.read_float()
    if frame_time is None:
        raise MissingSections("'Frame Time:' header lacks a value", cursor.i)

    if frame_count == 0:
        raise TruncatedMotionData("MOTION section declares no frames", cursor.i)

    layout = channel_layout(skeleton)
    width = skeleton.channel_count
    rows = []
    for frame in range(frame_count):
        row = []
        for _ in range(width):
            value = cursor.read_float()
            if value is None:
                raise TruncatedMotionData(
                    f"Frame {frame} of {frame_count} ends after {len(row)} of {width} values",
                    cursor.i)
            row.append(value)
        rows.append(row)
        cursor.next_line()

    raw = np.array(rows, dtype=np.float64).reshape((frame_count, width))
    positions, rotations = decode_channels(raw, skeleton, layout)
    return MotionData(positions, rotations, raw, frame_time, layout)
