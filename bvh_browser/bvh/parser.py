"""
BVH file parser.

Turns whole-file BVH text into a BVHClip (skeleton + motion). Any fatal error
raises a BVHError subclass and nothing partial is returned.
"""

from ..animation.sampler import sample
from ..errors import MalformedHierarchy, MissingSections
from ..utils.text_cursor import TextCursor
from .motion import read_motion
from .skeleton import SkeletonParser


class BVHClip:
    """A parsed BVH file: skeleton, motion and recoverable warnings."""

    def __init__(self, skeleton, motion, warnings=None):
        """
        Args:
            skeleton: Skeleton
            motion: MotionData matching the skeleton
            warnings: list of UnknownChannelToken collected while parsing
        """
        self.skeleton = skeleton
        self.motion = motion
        self.warnings = list(warnings or [])

    @property
    def frame_count(self):
        return self.motion.frame_count

    @property
    def frame_time(self):
        return self.motion.frame_time

    @property
    def duration(self):
        return self.frame_count * self.frame_time

    def sample(self, frame):
        """World-space Pose at fractional frame `frame`."""
        return sample(self.skeleton, self.motion, frame)

    def __repr__(self):
        return (f"BVHClip(joints={len(self.skeleton)}, frames={self.frame_count}, "
                f"frame_time={self.frame_time})")


def _decode(buffer):
    if isinstance(buffer, str):
        return buffer
    return bytes(buffer).decode('utf-8', errors='replace')


def parse(buffer):
    """
    Parse a complete BVH file held in memory.

    Args:
        buffer: file contents as bytes, bytearray or str

    Returns:
        BVHClip

    Raises:
        MalformedHierarchy, TruncatedMotionData, MissingSections
    """
    cursor = TextCursor(_decode(buffer))
    skeleton = None
    warnings = []

    while True:
        cursor.whitespace()
        if cursor.at_end:
            break

        if cursor.word("HIERARCHY"):
            cursor.next_line()
            if not cursor.word("ROOT"):
                raise MissingSections("HIERARCHY section has no ROOT joint", cursor.i)
            skeleton_parser = SkeletonParser(cursor)
            try:
                skeleton = skeleton_parser.parse_root()
            except RecursionError:
                raise MalformedHierarchy("Joint hierarchy is nested too deeply", cursor.i) from None
            warnings.extend(skeleton_parser.warnings)

        elif cursor.word("MOTION"):
            if skeleton is None:
                raise MissingSections("MOTION section precedes HIERARCHY", cursor.i)
            motion = read_motion(cursor, skeleton)
            return BVHClip(skeleton, motion, warnings)

        else:
            position = cursor.i
            raise MalformedHierarchy(f"Unexpected token '{cursor.read_token()}'", position)

    if skeleton is None:
        raise MissingSections("File has no HIERARCHY section")
    raise MissingSections("File has no MOTION section")


def load_bvh_file(bvh_file):
    """
    Read and parse a BVH file from disk.

    Args:
        bvh_file: Path to BVH file

    Returns:
        BVHClip
    """
    with open(bvh_file, "rb") as f:
        return parse(f.read())
