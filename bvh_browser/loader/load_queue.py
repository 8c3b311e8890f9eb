"""
LoadQueue - Background BVH loading for many viewer slots.

This module provides the LoadQueue class, which services load requests from a
FIFO in a single background thread so parsing never blocks the render loop,
and the Slot objects that receive the results.
"""

import enum
import os
import threading
import time
from collections import deque

from ..animation.state import AnimationState
from ..bvh.parser import parse

DEFAULT_POLL_INTERVAL = 0.01


class SlotState(enum.Enum):
    EMPTY = "empty"
    QUEUED = "queued"
    LOADING = "loading"
    LOADED = "loaded"
    INVALID = "invalid"


class Slot:
    """
    Presentation-side container awaiting or holding a loaded clip.

    State and result are only written by LoadQueue while it holds its lock;
    reads are plain attribute reads. The clip is attached before the state
    flips to LOADED, so a reader that sees LOADED always sees the clip.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.source = None
        self.error = None
        self.animation = None
        self._clip = None
        self._state = SlotState.EMPTY

    @property
    def state(self):
        return self._state

    @property
    def clip(self):
        """The loaded BVHClip, or None unless the state is LOADED."""
        if self._state is not SlotState.LOADED:
            return None
        return self._clip

    def update(self, elapsed: float):
        """Advance playback by `elapsed` seconds if a clip is loaded."""
        if self._state is SlotState.LOADED and self.animation is not None:
            self.animation.update(elapsed)

    def __repr__(self):
        return f"Slot({self.name!r}, {self._state.value})"


class LoadRequest:
    """A source to read and the slot that receives the result."""

    def __init__(self, source, slot):
        self.source = source
        self.slot = slot

    def __repr__(self):
        return f"LoadRequest({self.source!r} -> {self.slot!r})"


def read_source(source):
    """
    Default reader: bytes pass through, paths are read from disk.

    Args:
        source: bytes, bytearray, str or os.PathLike

    Returns:
        File contents as bytes
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        with open(source, "rb") as f:
            return f.read()
    raise TypeError(f"Cannot read BVH data from {type(source).__name__}")


class LoadQueue:
    """
    FIFO of load requests serviced by one background worker.

    One lock guards the request queue and every slot state transition. It is
    never held while reading or parsing, so enqueue/cancel from the render
    thread return immediately.

    Example usage:
        queue = LoadQueue()
        queue.start()

        slot = Slot("walk")
        queue.enqueue("walk.bvh", slot)

        while running:
            if slot.state is SlotState.LOADED:
                slot.update(dt)
                pose = slot.animation.pose

        queue.stop()
    """

    def __init__(self, reader=read_source, poll_interval: float = DEFAULT_POLL_INTERVAL,
                 verbose: bool = False):
        """
        Initialize the LoadQueue.

        Args:
            reader: callable turning a request source into bytes (default: read_source)
            poll_interval: seconds the worker sleeps between polls (default: 0.01)
            verbose: Print per-request progress
        """
        self.reader = reader
        self.poll_interval = poll_interval
        self.verbose = verbose
        self.lock = threading.Lock()
        self.requests = deque()
        self.thread = None
        self.running = False
        self._stop_event = None
        # Held for a whole pop + parse so at most one load is ever in flight
        self._work_lock = threading.Lock()

    def start(self):
        """Start the worker thread."""
        if self.running:
            return
        self.running = True
        self._stop_event = threading.Event()
        self.thread = threading.Thread(target=self._worker_loop, args=(self._stop_event,),
                                       name="LoadQueue", daemon=True)
        self.thread.start()
        print("[LoadQueue] Worker started")

    def stop(self, timeout: float = 5.0):
        """Stop the worker thread. An in-flight load finishes first."""
        self.running = False
        if self._stop_event is not None:
            self._stop_event.set()
        if self.thread is not None:
            self.thread.join(timeout)
            if self.thread.is_alive():
                print("[LoadQueue] Worker still finishing a load, it will exit afterwards")
        self.thread = None
        self._stop_event = None
        print("[LoadQueue] Worker stopped")

    def is_running(self):
        return self.running and self.thread is not None and self.thread.is_alive()

    def enqueue(self, source, slot):
        """
        Queue `source` for loading into `slot`.

        The caller must not enqueue a slot that is already QUEUED or LOADING;
        that is not checked here and would load it twice.
        """
        request = LoadRequest(source, slot)
        with self.lock:
            self.requests.append(request)
            slot.source = source
            slot._state = SlotState.QUEUED
        if self.verbose:
            print(f"[LoadQueue] Queued {request}")
        return request

    def cancel(self, slot):
        """
        Remove the first queued request for `slot` and reset it to EMPTY.

        A request already being loaded is not affected.

        Returns:
            True if a request was removed
        """
        with self.lock:
            for request in self.requests:
                if request.slot is slot:
                    self.requests.remove(request)
                    slot._clip = None
                    slot.animation = None
                    slot.error = None
                    slot._state = SlotState.EMPTY
                    break
            else:
                return False
        if self.verbose:
            print(f"[LoadQueue] Cancelled {request}")
        return True

    def pending(self):
        """Number of requests waiting in the queue."""
        with self.lock:
            return len(self.requests)

    def state(self, slot):
        return slot.state

    def result(self, slot):
        return slot.clip

    def run_once(self):
        """
        Pop and process one request on the calling thread.

        Returns:
            True if a request was processed, False if the queue was empty
        """
        with self._work_lock:
            with self.lock:
                if not self.requests:
                    return False
                request = self.requests.popleft()
                request.slot._state = SlotState.LOADING

            if self.verbose:
                print(f"[LoadQueue] Loading {request}")

            clip = None
            error = None
            try:
                clip = parse(self.reader(request.source))
            except Exception as e:
                error = e
                print(f"[LoadQueue] Failed to load {request.source!r}: {e}")

            self._publish(request.slot, clip, error)
            return True

    def _publish(self, slot, clip, error):
        animation = AnimationState(clip) if clip is not None else None
        with self.lock:
            slot._clip = clip
            slot.animation = animation
            slot.error = error
            slot._state = SlotState.LOADED if clip is not None else SlotState.INVALID
        if self.verbose:
            print(f"[LoadQueue] {slot!r} -> {slot.state.value}")

    def _worker_loop(self, stop_event):
        """Background thread that drains the queue until `stop_event` is set."""
        while not stop_event.is_set():
            self.run_once()
            time.sleep(self.poll_interval)
