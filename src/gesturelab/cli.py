"""CLI for gesturelab: ``gesturelab run``, ``gesturelab classify`` and ``gesturelab rules``."""

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gesturelab",
        description="Rule-based hand gesture recognition on MediaPipe landmarks",
    )
    sub = parser.add_subparsers(dest="command")

    # gesturelab run
    run_p = sub.add_parser("run", help="Recognize gestures on a video file or camera")
    run_p.add_argument(
        "--input", "-i",
        required=True,
        help="Input source: file path or camera index (int)",
    )
    run_p.add_argument(
        "--config", "-c",
        default=None,
        help="YAML config file (see GestureConfig)",
    )
    run_p.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Consecutive frames before a gesture is reported (overrides config)",
    )
    run_p.add_argument(
        "--fps",
        type=float,
        default=None,
        help="Target FPS for analysis (skip frames to match)",
    )
    run_p.add_argument(
        "--max-frames",
        type=int,
        default=None,
        help="Stop after N processed frames",
    )
    run_p.add_argument(
        "--viz",
        choices=["text", "live"],
        default="text",
        help="Visualization mode (default: text)",
    )
    run_p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    # gesturelab classify
    cls_p = sub.add_parser(
        "classify",
        help="Classify recorded landmarks from a JSON file",
    )
    cls_p.add_argument(
        "path",
        help="JSON list of frames; each frame is null or 21 [x, y, z] triples",
    )
    cls_p.add_argument(
        "--threshold",
        type=int,
        default=3,
        help="Consecutive frames before a gesture is reported (default: 3)",
    )
    cls_p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    # gesturelab rules
    sub.add_parser("rules", help="Show the gesture decision table")

    return parser


def _resolve_input(input_str: str):
    """Resolve --input to a source path or camera index."""
    try:
        return int(input_str)
    except ValueError:
        return input_str


def _load_config(args: argparse.Namespace):
    from gesturelab.config import GestureConfig

    data = GestureConfig.from_yaml(args.config).to_dict() if args.config else {}
    if args.threshold is not None:
        data["stability_threshold"] = args.threshold
    if args.fps is not None:
        data["fps"] = args.fps
    return GestureConfig.from_dict(data)


def _text_observation_callback(obs) -> None:
    """Print a one-line summary per frame."""
    gesture = obs.metadata.get("gesture_type") or "none"
    confidence = obs.signals.get("gesture_confidence", 0.0)
    hands = obs.metadata.get("hands_detected", 0)
    print(
        f"  [{obs.source}] frame={obs.frame_id} hands={hands} "
        f"gesture={gesture} confidence={confidence:.2f}"
    )


def _cmd_run(args: argparse.Namespace) -> None:
    """Handle ``gesturelab run``."""
    from gesturelab.analyzer import GestureAnalyzer
    from gesturelab.runner import GestureRunner

    config = _load_config(args)
    analyzer = GestureAnalyzer(config=config)
    source = _resolve_input(args.input)

    if args.viz == "text":
        runner = GestureRunner(analyzer, on_observation=_text_observation_callback)
        result = runner.run(source, fps=config.fps, max_frames=args.max_frames)
    else:
        from gesturelab.viz import FrameDisplay

        display = FrameDisplay(annotator=analyzer)
        runner = GestureRunner(analyzer, on_frame=display.update)
        try:
            result = runner.run(source, fps=config.fps, max_frames=args.max_frames)
        finally:
            display.close()

    detected = sum(1 for g in result.gestures if g)
    print(f"\nDone: {result.frame_count} frames, {detected} with a stable gesture")


def _cmd_classify(args: argparse.Namespace) -> None:
    """Handle ``gesturelab classify``."""
    from gesturelab.tracker import GestureTracker

    with open(args.path) as f:
        frames = json.load(f)
    if not isinstance(frames, list):
        raise ValueError(f"{args.path}: expected a JSON list of frames")

    tracker = GestureTracker(stability_threshold=args.threshold)
    for i, landmarks in enumerate(frames):
        state = tracker.update(landmarks)
        if not state.has_hand:
            print(f"  frame={i} no hand")
            continue
        print(
            f"  frame={i} raw={state.raw_gesture.value} ({state.raw_confidence:.2f}) "
            f"stable={state.gesture.value}"
        )


def _cmd_rules(args: argparse.Namespace) -> None:
    """Handle ``gesturelab rules``."""
    from gesturelab.classifier import GESTURE_RULES, UNKNOWN_RESULT

    for priority, rule in enumerate(GESTURE_RULES, start=1):
        print(f"  {priority}. {rule.name:20s} -> {rule.gesture.value:10s} {rule.confidence:.2f}")
    print(f"  -  {'otherwise':20s} -> {UNKNOWN_RESULT.gesture.value:10s} {UNKNOWN_RESULT.confidence:.2f}")


def main(argv=None):
    """Entry point for ``gesturelab`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    commands = {
        "run": _cmd_run,
        "classify": _cmd_classify,
        "rules": _cmd_rules,
    }
    try:
        commands[args.command](args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
