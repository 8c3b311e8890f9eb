#!/usr/bin/env python3
"""
Example: Load several BVH files in the background.

This script feeds every file given on the command line through a LoadQueue
while a fake render loop keeps ticking, printing slot states as they change.

Usage:
    python load_many.py a.bvh b.bvh c.bvh --cancel_last
"""

import argparse
import time

from bvh_browser import LoadQueue, Slot, SlotState


def main():
    parser = argparse.ArgumentParser(description="Background BVH loading")

    parser.add_argument(
        "files",
        nargs="+",
        help="BVH files to load",
    )

    parser.add_argument(
        "--cancel_last",
        action="store_true",
        default=False,
        help="Cancel the last request right after queueing it",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print loader progress",
    )

    args = parser.parse_args()

    queue = LoadQueue(verbose=args.verbose)
    slots = [Slot(path) for path in args.files]
    for slot in slots:
        queue.enqueue(slot.name, slot)
    if args.cancel_last:
        queue.cancel(slots[-1])

    queue.start()
    print("[Main] Press Ctrl+C to stop")

    last_states = {}
    tick = 1.0 / 60.0
    try:
        while True:
            for slot in slots:
                slot.update(tick)
                if last_states.get(slot) is not slot.state:
                    last_states[slot] = slot.state
                    detail = ""
                    if slot.state is SlotState.LOADED:
                        detail = f" {slot.clip!r}"
                    elif slot.state is SlotState.INVALID:
                        detail = f" {slot.error}"
                    print(f"[Main] {slot.name}: {slot.state.value}{detail}")

            busy = any(s.state in (SlotState.QUEUED, SlotState.LOADING) for s in slots)
            if not busy:
                break
            time.sleep(tick)

    except KeyboardInterrupt:
        print("\n[Main] Stopping...")
    finally:
        queue.stop()
        print("[Main] Done")


if __name__ == "__main__":
    main()
