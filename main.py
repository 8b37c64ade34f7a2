"""
Entry point for blockfall.

Supports two modes:
  - play:   Play the game with keyboard controls in a pygame window.
  - record: Autoplay a seeded game headlessly and save it as a GIF.

Usage:
    python main.py --mode play
    python main.py --mode play --config config/settings.yaml
    python main.py --mode record --output assets/demo.gif --frames 400 --seed 7
"""

from __future__ import annotations

import argparse
import pathlib
import sys

from blockfall.config import GameConfig, load_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, output, frames, fps and seed attributes.
    """
    parser = argparse.ArgumentParser(
        description="blockfall: a falling-block puzzle game.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "record"],
        default="play",
        help="Run mode: 'play' (manual play), 'record' (autoplay to a GIF).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML configuration file (default: built-in settings).",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="assets/demo.gif",
        help="Output GIF path for 'record' mode.",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=300,
        help="Maximum number of frames to record in 'record' mode.",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=12,
        help="Frames per second for 'record' mode (default: 12).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the piece randomizer (overrides the config file).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args(argv)
    try:
        config = load_config(args.config) if args.config else GameConfig()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.mode == "play":
        if args.seed is not None:
            import dataclasses
            config = dataclasses.replace(config, seed=args.seed)
        from blockfall.play import play_manual
        play_manual(config)

    elif args.mode == "record":
        from blockfall.gif import record_gif
        record_gif(
            config,
            pathlib.Path(args.output),
            max_frames=args.frames,
            frame_fps=args.fps,
            seed=args.seed,
        )

    else:
        print(f"Unknown mode: {args.mode}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
