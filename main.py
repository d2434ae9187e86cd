"""
Toy Robot Simulator
Entry point for CLI interface.
"""

import argparse
import sys
from pathlib import Path
from dotenv import load_dotenv


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toy-robot",
        description="Drive a toy robot on a square tabletop with PLACE/MOVE/LEFT/RIGHT/REPORT commands.",
    )
    parser.add_argument("command_file", nargs="?", default=None,
                        help="file of commands; omit or use '-' to type them interactively")
    parser.add_argument("--size", type=int, default=None,
                        help="tabletop size (default: $TABLETOP_SIZE or 5)")
    return parser


def main(argv=None):
    """
    Main entry point for the toy robot.
    Loads configuration and starts CLI interface.
    """

    # Load environment configuration
    env_path = Path(__file__).parent / ".env"
    load_dotenv(dotenv_path=env_path)

    args = build_parser().parse_args(argv)

    # Import CLI after .env loaded (modules may read env vars on import)
    from toy_robot.cli.interface import run_cli_session

    try:
        status = run_cli_session(args.command_file, size=args.size)
    except KeyboardInterrupt:
        print("\nShutting down gracefully...")
        sys.exit(0)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
