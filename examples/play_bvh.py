#!/usr/bin/env python3
"""
Example: Play a BVH file headlessly.

This script parses a BVH file, advances an AnimationState with a fixed clock
tick the way a render loop would, and prints world-space joint positions.

Usage:
    python play_bvh.py --bvh_file path/to/motion.bvh --seconds 2 --verbose

Output:
    - Prints the skeleton and sampled root/joint positions
    - Optionally saves world transforms of every frame to an .npz file
"""

import argparse
import os
import time

import numpy as np

from bvh_browser import AnimationState, load_bvh_file
from bvh_browser.animation import world_transforms_all


def main():
    parser = argparse.ArgumentParser(description="Headless BVH playback")

    parser.add_argument(
        "--bvh_file",
        type=str,
        required=True,
        help="Path to BVH motion file",
    )

    parser.add_argument(
        "--seconds",
        type=float,
        default=2.0,
        help="Playback duration in seconds (default: 2.0)",
    )

    parser.add_argument(
        "--tick",
        type=float,
        default=1.0 / 60.0,
        help="Clock tick in seconds (default: 1/60)",
    )

    parser.add_argument(
        "--speed",
        type=float,
        default=1.0,
        help="Playback speed multiplier (default: 1.0)",
    )

    parser.add_argument(
        "--save_path",
        type=str,
        default=None,
        help="Path to save world transforms of every frame (npz format)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print every joint each tick",
    )

    args = parser.parse_args()

    print(f"[Main] Loading BVH file: {args.bvh_file}")
    start_time = time.time()
    clip = load_bvh_file(args.bvh_file)
    elapsed = time.time() - start_time
    print(f"[Main] Parsed {clip!r} in {elapsed:.3f}s")
    for warning in clip.warnings:
        print(f"[Main] Warning: {warning}")

    skeleton = clip.skeleton
    for index, joint in enumerate(skeleton.joints):
        depth = 0
        parent = joint.parent
        while parent >= 0:
            depth += 1
            parent = skeleton.joints[parent].parent
        channels = " ".join(c.value for c in joint.channels)
        print(f"  [{index:2d}] {'  ' * depth}{joint.name or '<unnamed>'} ({channels})")

    state = AnimationState(clip, speed=args.speed)
    ticks = int(args.seconds / args.tick)
    for tick in range(ticks):
        state.update(args.tick)
        pose = state.pose
        root_pos, root_rot = pose[skeleton.root]
        print(f"[Tick {tick:4d}] frame={state.frame:8.3f} "
              f"root pos=({root_pos[0]:7.3f}, {root_pos[1]:7.3f}, {root_pos[2]:7.3f}) "
              f"rot=({root_rot[0]:6.3f}, {root_rot[1]:6.3f}, {root_rot[2]:6.3f}, {root_rot[3]:6.3f})")
        if args.verbose:
            for index, joint in enumerate(skeleton.joints):
                pos = pose.positions[index]
                print(f"  [{index:2d}] {joint.name:20s} pos=({pos[0]:7.3f}, {pos[1]:7.3f}, {pos[2]:7.3f})")

    if args.save_path:
        save_dir = os.path.dirname(args.save_path)
        if save_dir:
            os.makedirs(save_dir, exist_ok=True)

        positions, rotations = world_transforms_all(clip)
        np.savez(
            args.save_path,
            frame_time=clip.frame_time,
            names=np.array(skeleton.names),
            parents=skeleton.parents,
            positions=positions,
            rotations=rotations,  # wxyz format
        )
        print(f"\n[Main] Saved to {args.save_path}")


if __name__ == "__main__":
    main()
