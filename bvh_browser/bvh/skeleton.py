"""
BVH skeleton hierarchy: joints, channel layout and the HIERARCHY parser.

Joints are stored in a flat list in depth-first pre-order, each one pointing
at its parent by index. A parent's index is therefore always smaller than the
index of any of its descendants.
"""

import enum

import numpy as np

from ..errors import MalformedHierarchy, UnknownChannelToken


class Channel(enum.Enum):
    """One animated degree of freedom of a joint."""

    XPOS = "Xposition"
    YPOS = "Yposition"
    ZPOS = "Zposition"
    XROT = "Xrotation"
    YROT = "Yrotation"
    ZROT = "Zrotation"

    @property
    def is_rotation(self):
        return self in (Channel.XROT, Channel.YROT, Channel.ZROT)

    @property
    def axis(self):
        """Component index: 0 for X, 1 for Y, 2 for Z."""
        return "XYZ".index(self.value[0])


class Joint:
    """A node of the skeleton tree."""

    def __init__(self, name="", parent=-1):
        """
        Args:
            name: joint name, may be empty
            parent: index of the parent joint, -1 for the root
        """
        self.name = name
        self.parent = parent
        self.offset = np.zeros(3)
        self.end = np.zeros(3)
        self.channels = []

    @property
    def length(self):
        """Distance to the end point, used to size the drawn bone."""
        return float(np.linalg.norm(self.end))

    def __repr__(self):
        return f"Joint({self.name!r}, parent={self.parent}, channels={len(self.channels)})"


class Skeleton:
    """Immutable flat joint list produced by SkeletonParser."""

    def __init__(self, joints):
        """
        Args:
            joints: list of Joint in pre-order, the root first
        """
        for joint in joints:
            joint.channels = tuple(joint.channels)
            joint.offset.setflags(write=False)
            joint.end.setflags(write=False)
        self.joints = tuple(joints)
        self.parents = np.array([j.parent for j in self.joints], dtype=int)
        self.offsets = np.array([j.offset for j in self.joints]).reshape((-1, 3))
        self.offsets.setflags(write=False)
        self.parents.setflags(write=False)

    @property
    def root(self):
        return 0

    @property
    def names(self):
        return [j.name for j in self.joints]

    @property
    def channel_count(self):
        """Number of values one motion frame holds for this skeleton."""
        return sum(len(j.channels) for j in self.joints)

    def find(self, name):
        """Return the index of the joint called `name`."""
        for index, joint in enumerate(self.joints):
            if joint.name == name:
                return index
        raise KeyError(f"No joint named '{name}'")

    def children(self, index):
        return [i for i, j in enumerate(self.joints) if j.parent == index]

    def __len__(self):
        return len(self.joints)

    def __getitem__(self, index):
        return self.joints[index]


class SkeletonParser:
    """
    Recursive-descent reader for ROOT/JOINT blocks.

    Example usage:
        cursor = TextCursor(text)
        ...                        # advance past "ROOT"
        parser = SkeletonParser(cursor)
        skeleton = parser.parse_root()
        parser.warnings            # recoverable UnknownChannelToken errors
    """

    _CHANNEL_TOKENS = [(c.value, c) for c in Channel]

    def __init__(self, cursor):
        self.cursor = cursor
        self.joints = []
        self.warnings = []

    def parse_root(self):
        """Parse the block following ROOT and return the whole Skeleton."""
        self.read_joint()
        return Skeleton(self.joints)

    def read_joint(self, parent=-1):
        """
        Parse one joint block (name and braces) and all of its descendants.

        The cursor must sit just after the ROOT or JOINT keyword.

        Returns:
            Index of the new joint in the flat list
        """
        cur = self.cursor
        name = cur.read_identifier()
        cur.whitespace()
        if not cur.word("{"):
            raise MalformedHierarchy(f"Expected '{{' after joint '{name}'", cur.i)

        joint = Joint(name, parent)
        index = len(self.joints)
        self.joints.append(joint)

        child_sum = np.zeros(3)
        child_count = 0
        has_end_site = False

        while True:
            cur.whitespace()
            if cur.at_end:
                raise MalformedHierarchy(f"Unexpected end of file inside joint '{name}'", cur.i)

            if cur.word("OFFSET"):
                joint.offset = self._read_vec3(name)

            elif cur.word("CHANNELS"):
                self._read_channels(joint)

            elif cur.word("JOINT"):
                child = self.read_joint(index)
                child_sum += self.joints[child].offset
                child_count += 1

            elif cur.word("End Site"):
                joint.end = self._read_end_site(name)
                has_end_site = True

            elif cur.word("}"):
                if child_count > 0 and not has_end_site:
                    joint.end = child_sum / child_count
                return index

            else:
                # Unknown extension keyword
                cur.next_line()

    def _read_vec3(self, name):
        cur = self.cursor
        values = [cur.read_float() for _ in range(3)]
        if None in values:
            raise MalformedHierarchy(f"OFFSET of joint '{name}' needs three numbers", cur.i)
        return np.array(values)

    def _read_channels(self, joint):
        cur = self.cursor
        count = cur.read_int()
        if count is None or count < 0:
            raise MalformedHierarchy(f"CHANNELS of joint '{joint.name}' lacks a count", cur.i)

        for _ in range(count):
            cur.whitespace()
            channel = self._match_channel()
            if channel is None:
                position = cur.i
                warning = UnknownChannelToken(cur.read_token(), joint.name, position)
                print(f"[BVHParser] Warning: {warning}")
                self.warnings.append(warning)
                cur.next_line()
                return
            joint.channels.append(channel)

    def _match_channel(self):
        for token, channel in self._CHANNEL_TOKENS:
            if self.cursor.word(token):
                return channel
        return None

    def _read_end_site(self, name):
        cur = self.cursor
        cur.whitespace()
        if not cur.word("{"):
            raise MalformedHierarchy(f"Expected '{{' after End Site of joint '{name}'", cur.i)

        end = np.zeros(3)
        while True:
            cur.whitespace()
            if cur.at_end:
                raise MalformedHierarchy(f"Unexpected end of file in End Site of joint '{name}'", cur.i)
            if cur.word("}"):
                return end
            if cur.word("OFFSET"):
                end = self._read_vec3(name)
            else:
                cur.next_line()
