import pytest

from bvh_browser import (
    BVHClip,
    BVHError,
    MalformedHierarchy,
    MissingSections,
    load_bvh_file,
    parse,
)


def test_parse_accepts_bytes_and_str(two_joint_bvh):
    from_str = parse(two_joint_bvh)
    from_bytes = parse(two_joint_bvh.encode("utf-8"))
    assert isinstance(from_bytes, BVHClip)
    assert from_str.skeleton.names == from_bytes.skeleton.names == ["A", "B"]
    assert from_bytes.frame_count == 1
    assert from_bytes.frame_time == pytest.approx(0.0333)
    assert from_bytes.warnings == []


def test_windows_line_endings(two_joint_bvh):
    clip = parse(two_joint_bvh.replace("\n", "\r\n"))
    assert clip.skeleton.names == ["A", "B"]
    assert clip.frame_count == 1


def test_load_bvh_file(tmp_path, two_frame_bvh):
    path = tmp_path / "walk.bvh"
    path.write_text(two_frame_bvh)
    clip = load_bvh_file(path)
    assert clip.frame_count == 2
    assert "frames=2" in repr(clip)


def test_missing_root_brace_is_malformed(two_joint_bvh):
    # Drop the final "}" that closes ROOT
    head, _, tail = two_joint_bvh.rpartition("}\nMOTION")
    with pytest.raises(MalformedHierarchy):
        parse(head + "\nMOTION" + tail)


@pytest.mark.parametrize("text", [
    "",
    "   \n\t",
    "MOTION\nFrames: 1\nFrame Time: 0.1\n0\n",
    "HIERARCHY\nJOINT A\n{\n}\nMOTION\nFrames: 1\nFrame Time: 0.1\n",
    "HIERARCHY\nROOT A\n{\nOFFSET 0 0 0\n}\n",
    "HIERARCHY\nROOT A\n{\n}\nMOTION\nFrame Time: 0.1\n",
    "HIERARCHY\nROOT A\n{\n}\nMOTION\nFrames: 1\n",
])
def test_missing_sections(text):
    with pytest.raises(MissingSections):
        parse(text)


@pytest.mark.parametrize("text", [
    "garbage\nHIERARCHY\n",
    "HIERARCHY\nROOT A\nOFFSET 0 0 0\n",
])
def test_malformed_top_level(text):
    with pytest.raises(MalformedHierarchy):
        parse(text)


def test_errors_share_a_base(two_joint_bvh):
    with pytest.raises(BVHError) as info:
        parse(two_joint_bvh.replace("Frames: 1", "Frames: 5"))
    assert isinstance(info.value, ValueError)
    assert info.value.position is not None


def test_unknown_channel_is_a_warning_not_a_failure(capsys):
    text = """HIERARCHY
ROOT Hips
{
	OFFSET 0 0 0
	CHANNELS 4 Xposition Yposition Wposition Zposition
}
MOTION
Frames: 1
Frame Time: 0.1
1 2
"""
    clip = parse(text)
    assert len(clip.warnings) == 1
    assert clip.motion.positions[0, 0].tolist() == [1.0, 2.0, 0.0]
    assert "Wposition" in capsys.readouterr().out


def test_deep_hierarchy_fails_cleanly():
    depth = 5000
    text = (
        "HIERARCHY\nROOT J0\n{\nOFFSET 0 0 0\n"
        + "".join(f"JOINT J{i}\n{{\nOFFSET 0 1 0\n" for i in range(1, depth))
        + "}\n" * depth
        + "MOTION\nFrames: 1\nFrame Time: 0.1\n\n"
    )
    with pytest.raises(MalformedHierarchy, match="nested too deeply"):
        parse(text)
