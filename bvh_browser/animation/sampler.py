"""
Animation sampler: world-space joint transforms at a fractional frame.

Local rotations of the two bracketing frames are slerped, then composed down
the hierarchy in index order (parents always precede their children).
"""

import math

import numpy as np
from scipy.spatial.transform import Rotation as R

from ..utils.quat_utils import (
    lerp,
    quat_mul_batch,
    quat_mul_vec_batch,
    quat_slerp,
)


class Pose:
    """World-space transforms of every joint at one instant."""

    def __init__(self, positions, rotations):
        """
        Args:
            positions: world positions (J, 3)
            rotations: world quaternions (J, 4) in (w, x, y, z) format
        """
        self.positions = positions
        self.rotations = rotations

    def __len__(self):
        return self.positions.shape[0]

    def __getitem__(self, joint):
        return self.positions[joint], self.rotations[joint]

    def matrices(self):
        """
        Homogeneous 4x4 world matrices (column-vector convention).

        Returns:
            Array of shape (J, 4, 4)
        """
        mats = np.zeros((len(self), 4, 4))
        mats[:, :3, :3] = R.from_quat(self.rotations, scalar_first=True).as_matrix()
        mats[:, :3, 3] = self.positions
        mats[:, 3, 3] = 1.0
        return mats


def forward_kinematics(lrot, root_pos, offsets, parents):
    """
    Performs Forward Kinematics (FK) on local rotations.

    Non-root joints are placed at their static bind offset; translation
    channels only move the root.

    Args:
        lrot: tensor of local quaternions with shape (..., Nb of joints, 4) in (w, x, y, z) format
        root_pos: tensor of root positions with shape (..., 3)
        offsets: bind pose offsets (Nb of joints, 3)
        parents: list of parents indices

    Returns:
        tuple of tensors of global quaternion, global positions
    """
    gp, gr = [root_pos[..., np.newaxis, :]], [lrot[..., :1, :]]
    for i in range(1, len(parents)):
        offset = np.broadcast_to(offsets[i], root_pos.shape)[..., np.newaxis, :]
        gp.append(quat_mul_vec_batch(gr[parents[i]], offset) + gp[parents[i]])
        gr.append(quat_mul_batch(gr[parents[i]], lrot[..., i:i+1, :]))

    res = np.concatenate(gr, axis=-2), np.concatenate(gp, axis=-2)
    return res


def local_transforms(motion, frame):
    """
    Interpolated local transforms at a fractional frame.

    Args:
        motion: MotionData
        frame: frame position f >= 0

    Returns:
        tuple of (positions (J, 3), rotations (J, 4))
    """
    if motion.frame_count == 0:
        raise ValueError("Cannot sample a clip without frames")
    if frame < 0:
        raise ValueError(f"Frame must be non-negative, got {frame}")

    i = int(math.floor(frame))
    t = frame - i
    last = motion.frame_count - 1
    if i >= last:
        i, t = last, 0.0

    if t == 0.0:
        return motion.positions[i], motion.rotations[i]

    pos = lerp(motion.positions[i], motion.positions[i + 1], t)
    rot = quat_slerp(motion.rotations[i], motion.rotations[i + 1], t)
    return pos, rot


def sample(skeleton, motion, frame):
    """
    World-space pose of every joint at fractional frame `frame`.

    Wrapping `frame` for looping playback is the caller's job; frames past the
    last one hold the last frame.

    Args:
        skeleton: Skeleton
        motion: MotionData decoded for that skeleton
        frame: frame position f >= 0

    Returns:
        Pose
    """
    pos, rot = local_transforms(motion, frame)
    rotations, positions = forward_kinematics(rot, pos[0], skeleton.offsets, skeleton.parents)
    return Pose(positions, rotations)


def world_transforms_all(clip):
    """
    World transforms of every frame at once.

    Args:
        clip: BVHClip

    Returns:
        tuple of (positions (F, J, 3), rotations (F, J, 4))
    """
    motion = clip.motion
    rotations, positions = forward_kinematics(
        motion.rotations, motion.positions[:, 0], clip.skeleton.offsets, clip.skeleton.parents)
    return positions, rotations
