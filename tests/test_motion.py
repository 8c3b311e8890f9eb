import numpy as np
import pytest
from scipy.spatial.transform import Rotation as R

from bvh_browser import Channel, TruncatedMotionData, parse

ROUND_TRIP_ORDER = ["Zrotation", "Xrotation", "Yrotation", "Xposition", "Yposition", "Zposition"]


def _single_joint_clip(channels, values):
    """Write a one-joint, one-frame BVH file for the given channel values."""
    return (
        "HIERARCHY\n"
        "ROOT Hips\n"
        "{\n"
        "\tOFFSET 0 0 0\n"
        f"\tCHANNELS {len(channels)} {' '.join(channels)}\n"
        "\tEnd Site\n"
        "\t{\n"
        "\t\tOFFSET 0 1 0\n"
        "\t}\n"
        "}\n"
        "MOTION\n"
        "Frames: 1\n"
        "Frame Time: 0.04\n"
        f"{' '.join(str(v) for v in values)}\n"
    )


def test_channel_round_trip():
    values = [10.0, 20.0, 30.0, 1.5, -2.0, 3.25]
    clip = parse(_single_joint_clip(ROUND_TRIP_ORDER, values))
    motion = clip.motion

    decoded = motion.channel_values(0, 0)
    assert decoded == {
        Channel.ZROT: 10.0, Channel.XROT: 20.0, Channel.YROT: 30.0,
        Channel.XPOS: 1.5, Channel.YPOS: -2.0, Channel.ZPOS: 3.25,
    }
    np.testing.assert_allclose(motion.positions[0, 0], [1.5, -2.0, 3.25])

    rotation = R.from_quat(motion.rotations[0, 0], scalar_first=True)
    np.testing.assert_allclose(rotation.as_euler('ZXY', degrees=True), [10.0, 20.0, 30.0], atol=1e-9)


def test_rotation_order_is_zxy_regardless_of_declared_order():
    values = [30.0, 20.0, 10.0]
    clip = parse(_single_joint_clip(["Xrotation", "Yrotation", "Zrotation"], values))
    expected = R.from_euler('ZXY', [10.0, 30.0, 20.0], degrees=True)
    actual = R.from_quat(clip.motion.rotations[0, 0], scalar_first=True)
    np.testing.assert_allclose(actual.as_matrix(), expected.as_matrix(), atol=1e-12)


def test_shapes_and_header(branching_bvh):
    clip = parse(branching_bvh)
    motion = clip.motion
    assert motion.frame_count == 3
    assert motion.joint_count == 5
    assert motion.positions.shape == (3, 5, 3)
    assert motion.rotations.shape == (3, 5, 4)
    assert motion.channels.shape == (3, 18)
    assert clip.frame_time == pytest.approx(0.25)
    assert clip.duration == pytest.approx(0.75)
    np.testing.assert_allclose(motion.positions[2, 0], [0, 1, 2])
    np.testing.assert_allclose(np.linalg.norm(motion.rotations, axis=-1), 1.0)


def test_joint_without_channels_gets_identity():
    text = """HIERARCHY
ROOT Hips
{
	OFFSET 0 0 0
	CHANNELS 3 Zrotation Xrotation Yrotation
	JOINT Fixed
	{
		OFFSET 0 1 0
		JOINT Tip
		{
			OFFSET 0 1 0
			CHANNELS 1 Zrotation
			End Site
			{
				OFFSET 0 1 0
			}
		}
	}
}
MOTION
Frames: 1
Frame Time: 0.1
0 0 0 90
"""
    motion = parse(text).motion
    np.testing.assert_array_equal(motion.rotations[0, 1], [1, 0, 0, 0])
    assert motion.channel_values(1, 0) == {}
    assert motion.channel_values(2, 0) == {Channel.ZROT: 90.0}


def test_frame_values_may_span_lines_and_extra_values_are_ignored():
    text = _single_joint_clip(["Xposition", "Yposition", "Zposition"], [1, 2])
    text = text.replace("Frames: 1", "Frames: 2") + "3 99\n4 5 6\n"
    motion = parse(text).motion
    np.testing.assert_allclose(motion.positions[:, 0], [[1, 2, 3], [4, 5, 6]])


def test_truncated_motion_fails():
    text = _single_joint_clip(ROUND_TRIP_ORDER, [0, 0, 0, 0, 0, 0])
    text = text.replace("Frames: 1", "Frames: 3")
    with pytest.raises(TruncatedMotionData):
        parse(text)


def test_partial_frame_fails():
    with pytest.raises(TruncatedMotionData):
        parse(_single_joint_clip(ROUND_TRIP_ORDER, [1, 2, 3]))


def test_zero_frames_fails():
    text = _single_joint_clip(ROUND_TRIP_ORDER, []).replace("Frames: 1", "Frames: 0")
    with pytest.raises(TruncatedMotionData):
        parse(text)
