"""
Agile Assist Proxy — Entry Point

Usage:
    # Run the HTTP API (port from PORT, default 4000)
    python main.py --mode serve

    # Print the prompt an action would send to the model
    python main.py --mode prompt --action tasks --title "Add filter" \
        --description "Let users filter by date" --type Story
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional


def _configure() -> None:
    from config.logging_config import configure_logging
    configure_logging()


def run_server() -> None:
    _configure()
    from api.server import serve
    serve()


def show_prompt(title: str, description: str, issue_type: str, action: str) -> None:
    from prompts.agile_prompts import build_prompt

    print(build_prompt(title, description, issue_type, action))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Agile Assist Proxy")
    parser.add_argument(
        "--mode",
        choices=["serve", "prompt"],
        default="serve",
        help="Run mode",
    )
    parser.add_argument("--action", help="Generation action (required for --mode prompt)")
    parser.add_argument("--title", help="Issue title (required for --mode prompt)")
    parser.add_argument("--description", default="", help="Issue description")
    parser.add_argument("--type", dest="issue_type", default="", help="Issue type, e.g. Story")

    args = parser.parse_args(argv)

    if args.mode == "serve":
        run_server()
    elif args.mode == "prompt":
        if not args.action or not args.title:
            print("ERROR: --action and --title are required with --mode prompt", file=sys.stderr)
            sys.exit(1)
        show_prompt(args.title, args.description, args.issue_type, args.action)


if __name__ == "__main__":
    main()
