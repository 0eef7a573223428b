"""
Command-line interface for the AI Dungeon client.

Provides two commands:
- catalog: print the recommended story starts as JSON
- play: start a story and exchange replies on stdin/stdout

Usage:
    aidungeon catalog
    aidungeon play --custom "You wake up in a cellar."
    aidungeon play --mode fantasy --name Ada --character knight
    aidungeon --register ada play --custom "..."

Environment Variables:
    AIDUNGEON_EMAIL: Account email (prompted if unset)
    AIDUNGEON_PASSWORD: Account password (prompted if unset)
    AIDUNGEON_API_URL, AIDUNGEON_TIMEOUT, AIDUNGEON_LOG_LEVEL: see config.py
"""

import argparse
import getpass
import json
import os
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from aidungeon_client.api import AIDungeonClient, login, register
from aidungeon_client.config import Config, add_arguments, configure_logging
from aidungeon_client.errors import (
    AIDungeonError,
    EmailAlreadyExistsError,
    UsernameAlreadyExistsError,
)
from aidungeon_client.models import CUSTOM_STORY_MODE, NarrativeEvent, StartOptions


def get_credentials_from_env() -> tuple[str, str] | None:
    """
    Get account credentials from environment variables.

    Returns:
        Tuple of (email, password) if both AIDUNGEON_EMAIL and
        AIDUNGEON_PASSWORD are set, otherwise None.
    """
    email = os.environ.get("AIDUNGEON_EMAIL")
    password = os.environ.get("AIDUNGEON_PASSWORD")

    if email and password:
        return email, password
    return None


def prompt_for_credentials() -> tuple[str, str]:
    """Interactively ask for email and password."""
    email = input("Email: ").strip()
    password = getpass.getpass("Password: ")
    return email, password


def _read_credentials() -> tuple[str, str] | None:
    """Resolve credentials; return None if the prompt was aborted."""
    try:
        return get_credentials_from_env() or prompt_for_credentials()
    except (EOFError, KeyboardInterrupt):
        print("\nError: no credentials given.", file=sys.stderr)
        return None


def _connect(
    args: argparse.Namespace, config: Config, credentials: tuple[str, str]
) -> AIDungeonClient:
    email, password = credentials

    username = getattr(args, "register", None)
    if username:
        return register(email, username, password, config=config)
    return login(email, password, config=config)


def format_event(event: NarrativeEvent) -> str:
    """Render one transcript event for the terminal."""
    if event.kind == "input":
        text = f"> {event.value}"
    else:
        text = event.value
    if event.conclusion == "win":
        text += "\n\n*** You won! ***"
    elif event.conclusion == "lose":
        text += "\n\n*** You lost. ***"
    return text


def print_events(events: Sequence[NarrativeEvent]) -> bool:
    """Print ``events``; return True if the story has ended."""
    for event in events:
        print(format_event(event))
    return any(event.is_terminal for event in events)


def build_start_options(args: argparse.Namespace) -> StartOptions:
    """Translate play arguments into StartOptions."""
    if args.custom is not None:
        story_mode, prompt = CUSTOM_STORY_MODE, args.custom
    else:
        story_mode, prompt = args.mode, None
    return StartOptions(
        story_mode=story_mode,
        custom_prompt=prompt,
        name=args.name,
        character_type=args.character,
    )


def cmd_catalog(args: argparse.Namespace) -> int:
    """Print the recommended story catalog."""
    config = Config.from_namespace(args)
    configure_logging(config)

    credentials = _read_credentials()
    if credentials is None:
        return 1

    try:
        with _connect(args, config, credentials) as client:
            data = client.get_recommended_story()
    except AIDungeonError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    """Run an interactive story until EOF or the story concludes."""
    config = Config.from_namespace(args)
    configure_logging(config)

    try:
        options = build_start_options(args)
    except ValidationError as e:
        print(f"Invalid story options: {e}", file=sys.stderr)
        return 2

    credentials = _read_credentials()
    if credentials is None:
        return 1

    try:
        with _connect(args, config, credentials) as client:
            story = client.start_session(options)
            if print_events(story.initial_transcript):
                return 0

            while True:
                try:
                    text = input("> ").strip()
                except EOFError:
                    print()
                    return 0
                if not text:
                    continue
                if print_events(story.send_reply(text)):
                    return 0
    except EmailAlreadyExistsError:
        print("Error: this email is already registered; log in instead.", file=sys.stderr)
        return 1
    except UsernameAlreadyExistsError:
        print("Error: that username is taken; pick another one.", file=sys.stderr)
        return 1
    except AIDungeonError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="aidungeon",
        description="Play AI Dungeon stories from the terminal",
    )
    add_arguments(parser)
    parser.add_argument(
        "--register",
        metavar="USERNAME",
        help="Create a new account with this username instead of logging in",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    catalog_parser = subparsers.add_parser(
        "catalog",
        help="Show recommended story starts",
        description="Log in and print the server's premade story configurations as JSON.",
    )
    catalog_parser.set_defaults(func=cmd_catalog)

    play_parser = subparsers.add_parser(
        "play",
        help="Play a story",
        description=(
            "Start a story and read replies from stdin. "
            "Use --custom for your own opening, or --mode/--name/--character "
            "for a premade one."
        ),
    )
    start_group = play_parser.add_mutually_exclusive_group(required=True)
    start_group.add_argument("--custom", metavar="PROMPT", help="Custom opening prompt")
    start_group.add_argument("--mode", help="Premade story mode")
    play_parser.add_argument("--name", help="Character name (premade stories)")
    play_parser.add_argument("--character", help="Character type (premade stories)")
    play_parser.set_defaults(func=cmd_play)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
