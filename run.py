"""
PoseLift - Unified Entry Point

Replays pose-network heatmaps through the keypoint pipeline and prints the
smoothed keypoint table. Without a heatmap file a synthetic squat clip is
used.
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure poselift package is importable from project root
sys.path.insert(0, str(Path(__file__).parent))

from poselift.config import (
    PipelineConfig,
    SMOOTHING_WINDOW_SIZE,
    HEATMAP_LAYOUT,
    HEATMAP_LAYOUTS,
    DEFAULT_OVERLAY_PATH
)
from poselift.errors import ConfigurationError


def print_banner():
    """Display ASCII banner for CLI output."""
    print()
    print("=" * 60)
    print("  POSELIFT")
    print("  Heatmap Keypoint Decoding and Smoothing")
    print("=" * 60)
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Decode and smooth pose heatmaps.")
    parser.add_argument("heatmaps", nargs="?", help="Heatmap stack (.npy or .npz); omit for synthetic demo")
    parser.add_argument("--video", help="Source video to draw the skeleton on")
    parser.add_argument("--output", help=f"Annotated video path (default with --render: {DEFAULT_OVERLAY_PATH})")
    parser.add_argument("--render", action="store_true", help="Write an annotated overlay video")
    parser.add_argument("--window", type=int, default=SMOOTHING_WINDOW_SIZE, help="Frames to average per joint")
    parser.add_argument("--layout", choices=HEATMAP_LAYOUTS, default=HEATMAP_LAYOUT, help="Heatmap tensor layout")
    parser.add_argument("--flip", action="store_true", help="Mirror x (front-facing camera)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def print_progress(progress: float, message: str):
    print(f"\r  [{progress:>4.0%}] {message:<40}", end="", flush=True)


def main(argv=None) -> int:
    """
    CLI entry point.

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(levelname)s:%(name)s:%(message)s'
    )

    print_banner()

    heatmaps_path = Path(args.heatmaps) if args.heatmaps else None
    video_path = Path(args.video) if args.video else None
    for path in (heatmaps_path, video_path):
        if path is not None and not path.exists():
            print(f"[ERROR] File not found: {path}")
            return 1

    output_path = None
    if args.output or args.render or video_path is not None:
        output_path = Path(args.output) if args.output else DEFAULT_OVERLAY_PATH

    try:
        config = PipelineConfig(
            window_size=args.window,
            layout=args.layout,
            flip_horizontal=args.flip
        ).validate()
    except ConfigurationError as e:
        print(f"[ERROR] {e}")
        return 1

    print("[MODE] " + ("Heatmap replay" if heatmaps_path else "Synthetic demo") + "\n")

    # Lazy import to avoid loading OpenCV until needed
    from poselift.main import run_pipeline
    from poselift.output.table import render_table

    try:
        summary = run_pipeline(
            heatmaps_path=heatmaps_path,
            video_path=video_path,
            output_path=output_path,
            config=config,
            progress_callback=print_progress
        )
    except (ValueError, FileNotFoundError) as e:
        print(f"\n[ERROR] {e}")
        return 1
    print("\n")

    print(f"Frames processed: {summary['frames']}  "
          f"dropped: {summary['dropped_frames']}  "
          f"filter rebuilds: {summary['filter_rebuilds']}")

    timing = summary["timing"]
    if timing["frames"]:
        print(f"Post-processing: {timing['total_ms']:.2f} ms/frame "
              f"(decode {timing['decode_ms']:.2f}, smooth {timing['smooth_ms']:.2f})")

    print("\nFinal smoothed keypoints:")
    print(render_table(summary["final_points"], summary["joint_labels"]))

    if summary["output_path"]:
        print(f"\nOverlay saved: {summary['output_path']} ({summary['frames_written']} frames)")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
