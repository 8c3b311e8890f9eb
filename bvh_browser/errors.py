"""
Errors raised while reading BVH data.

All parse failures derive from BVHError so callers can treat any of them as
"nothing loaded". UnknownChannelToken is the only recoverable kind: the parser
collects it as a warning instead of raising it.
"""


class BVHError(ValueError):
    """Base class for BVH parse failures."""

    def __init__(self, message, position=None):
        """
        Args:
            message: Human readable description
            position: Character offset in the source text (optional)
        """
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position


class MalformedHierarchy(BVHError):
    """Structural brace/keyword error inside the HIERARCHY block."""


class UnknownChannelToken(BVHError):
    """A CHANNELS entry that is not one of the six known channel names."""

    def __init__(self, token, joint_name="", position=None):
        super().__init__(f"Invalid channel '{token}' in joint '{joint_name}'", position)
        self.token = token
        self.joint_name = joint_name


class TruncatedMotionData(BVHError):
    """Fewer numeric values than the declared frame/channel counts require."""


class MissingSections(BVHError):
    """HIERARCHY, ROOT, MOTION or a motion header is absent."""
