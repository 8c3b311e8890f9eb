import pytest

TWO_JOINT_BVH = """HIERARCHY
ROOT A
{
	OFFSET 0 0 0
	CHANNELS 6 Xposition Yposition Zposition Zrotation Xrotation Yrotation
	JOINT B
	{
		OFFSET 0 1 0
		CHANNELS 3 Xrotation Yrotation Zrotation
		End Site
		{
			OFFSET 0 1 0
		}
	}
}
MOTION
Frames: 1
Frame Time: 0.0333
0 0 0 0 0 0 0 0 0
"""

# Root moves 0 -> 2 on X and turns 0 -> 90 degrees about Y; B bends about Z
TWO_FRAME_BVH = """HIERARCHY
ROOT Hips
{
	OFFSET 0 0 0
	CHANNELS 6 Xposition Yposition Zposition Zrotation Xrotation Yrotation
	JOINT Spine
	{
		OFFSET 0 2 0
		CHANNELS 3 Zrotation Xrotation Yrotation
		End Site
		{
			OFFSET 0 1 0
		}
	}
}
MOTION
Frames: 2
Frame Time: 0.5
0 0 0 0 0 0 0 0 0
2 0 0 0 0 90 45 0 0
"""

BRANCHING_BVH = """HIERARCHY
ROOT Hips
{
	OFFSET 0 0 0
	CHANNELS 6 Xposition Yposition Zposition Zrotation Xrotation Yrotation
	JOINT LeftLeg
	{
		OFFSET 1 0 0
		CHANNELS 3 Zrotation Xrotation Yrotation
		JOINT LeftFoot
		{
			OFFSET 0 -2 0
			CHANNELS 3 Zrotation Xrotation Yrotation
			End Site
			{
				OFFSET 0 0 1
			}
		}
	}
	JOINT Chest
	{
		OFFSET 0 2 0
		CHANNELS 3 Zrotation Xrotation Yrotation
		JOINT Head
		{
			OFFSET 0 1 0
			CHANNELS 3 Zrotation Xrotation Yrotation
			End Site
			{
				OFFSET 0 0.5 0
			}
		}
	}
}
MOTION
Frames: 3
Frame Time: 0.25
0 1 0 0 0 0 10 0 0 0 20 0 0 0 30 0 0 0
0 1 1 0 0 45 10 0 5 0 20 0 0 0 30 5 5 5
0 1 2 0 0 90 10 0 10 0 20 0 0 0 30 10 10 10
"""


@pytest.fixture
def two_joint_bvh():
    return TWO_JOINT_BVH


@pytest.fixture
def two_frame_bvh():
    return TWO_FRAME_BVH


@pytest.fixture
def branching_bvh():
    return BRANCHING_BVH
