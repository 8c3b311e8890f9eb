"""
Playback state for one animated clip.
"""

from .sampler import sample

DEFAULT_FRAME_TIME = 1.0 / 30.0


class AnimationState:
    """
    Looping playback position over a BVHClip with a cached pose.

    Example usage:
        state = AnimationState(clip)
        while running:
            state.update(dt)          # seconds since the last tick
            pose = state.pose         # recomputed only if the frame moved
    """

    def __init__(self, clip, speed: float = 1.0):
        """
        Args:
            clip: BVHClip to play
            speed: playback rate multiplier (default: 1.0)
        """
        self.clip = clip
        self.speed = speed
        self.frame = 0.0
        self.paused = False
        self._pose = None
        self._pose_frame = None

    @property
    def frame_time(self):
        ft = self.clip.frame_time
        return ft if ft > 0.0 else DEFAULT_FRAME_TIME

    @property
    def time(self):
        """Playback position in seconds."""
        return self.frame * self.frame_time

    def update(self, elapsed: float):
        """Advance by `elapsed` seconds, wrapping to the start of the clip."""
        if self.paused:
            return
        self.seek(self.frame + elapsed * self.speed / self.frame_time)

    def seek(self, frame: float):
        self.frame = float(frame) % self.clip.frame_count

    def toggle_pause(self):
        self.paused = not self.paused
        return self.paused

    @property
    def pose(self):
        if self._pose is None or self._pose_frame != self.frame:
            self._pose = sample(self.clip.skeleton, self.clip.motion, self.frame)
            self._pose_frame = self.frame
        return self._pose
