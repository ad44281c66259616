"""Testing CLI for Court Pairing.

Generate random sessions, validate stored ones, or work interactively
with command completion.
"""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from courtpairing.constants import (
    DEFAULT_FORMAT,
    DEFAULT_MAX_REST_STREAK,
    FORMAT_NAMES,
    SESSION_FILE_EXTENSION,
)
from courtpairing.exceptions import CourtPairingException
from courtpairing.testing.rsg import RandomSessionGenerator, RSGConfig
from courtpairing.utils import setup_logger
from courtpairing.validation import create_round_checker, load_session

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "generate": {
        "description": "Generate a random session (RSG)",
        "options": {
            "--format": "Pairing format (" + "/".join(FORMAT_NAMES) + ")",
            "--players": "Number of participants (default: 12)",
            "--courts": "Number of courts (default: 2)",
            "--rounds": "Number of rounds (default: 6)",
            "--female-ratio": "Share of women in the pool (default: 0.5)",
            "--max-rest": "Rest streak limit (default: 2)",
            "--seed": "Random seed for reproducibility",
            "--output": "Output file path",
        },
    },
    "validate": {
        "description": "Validate the rounds of a session file",
        "options": {
            "--file": "Session file to validate (JSON)",
            "--detailed": "Show every violation and warning",
        },
    },
}


def create_generate_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate", description=COMMANDS["generate"]["description"]
    )
    parser.add_argument("--format", default=DEFAULT_FORMAT, choices=list(FORMAT_NAMES))
    parser.add_argument("--players", type=int, default=12)
    parser.add_argument("--courts", type=int, default=2)
    parser.add_argument("--rounds", type=int, default=6)
    parser.add_argument("--female-ratio", type=float, default=0.5)
    parser.add_argument("--max-rest", type=int, default=DEFAULT_MAX_REST_STREAK)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", type=str, default=None)
    return parser


def create_validate_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="validate", description=COMMANDS["validate"]["description"]
    )
    parser.add_argument("--file", required=True)
    parser.add_argument("--detailed", action="store_true")
    return parser


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="courtpairing-test",
        description="Court Pairing testing tools",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "generate",
        parents=[create_generate_parser()],
        add_help=False,
        help=COMMANDS["generate"]["description"],
    )
    subparsers.add_parser(
        "validate",
        parents=[create_validate_parser()],
        add_help=False,
        help=COMMANDS["validate"]["description"],
    )
    subparsers.add_parser("interactive", help="Interactive mode with completion")
    return parser


def print_session(session: dict) -> None:
    """Print the rounds of a session as a plain table."""
    for round_dict in session["rounds"]:
        print(f"{Colors.BOLD}Round {round_dict['round_number']}{Colors.ENDC}")
        for court, match in enumerate(round_dict["matches"], start=1):
            first, second = match["participants"]
            print(f"  Court {court}: {first} vs {second}")
        sitting_out = round_dict.get("resting", []) + round_dict.get("unmatched", [])
        if sitting_out:
            print(f"  Resting: {', '.join(sitting_out)}")


def run_generate_command(args: argparse.Namespace) -> int:
    config = RSGConfig(
        num_participants=args.players,
        num_rounds=args.rounds,
        court_count=args.courts,
        pairing_format=args.format,
        female_ratio=args.female_ratio,
        seed=args.seed,
        max_rest_streak=args.max_rest,
    )
    session = RandomSessionGenerator(config).generate_session()
    print_session(session)

    report = session.get("report")
    if report:
        colour = Colors.FAIL if report["violations"] else Colors.OKGREEN
        print(f"\n{colour}{report['summary']}{Colors.ENDC}")

    if args.output:
        output_path = Path(args.output)
        if not output_path.suffix:
            output_path = output_path.with_suffix(SESSION_FILE_EXTENSION)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(session, f, indent=2)
        print(f"Session written to {output_path}")

    return 1 if report and report["violations"] else 0


def run_validate_command(args: argparse.Namespace) -> int:
    session = load_session(args.file)
    report = create_round_checker().validate_session(session)

    colour = Colors.FAIL if report.violations else Colors.OKGREEN
    print(f"{colour}{report.summary}{Colors.ENDC}")
    print(f"Compliance: {report.compliance_percentage:.1f}%")
    if args.detailed:
        for violation in report.violations:
            print(f"  {Colors.FAIL}{violation.criterion}{Colors.ENDC}: {violation.message}")
        for warning in report.quality_warnings:
            print(f"  {Colors.WARNING}{warning.criterion}{Colors.ENDC}: {warning.message}")
    return 1 if report.violations else 0


HANDLERS = {
    "generate": (create_generate_parser, run_generate_command),
    "validate": (create_validate_parser, run_validate_command),
}


def execute(command: str, args: argparse.Namespace) -> int:
    """Run a parsed command, reporting engine errors instead of raising."""
    _, handler = HANDLERS[command]
    try:
        return handler(args)
    except CourtPairingException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1


def run_command(command: str, args_list: List[str]) -> int:
    """Parse and run one command line of interactive mode."""
    if command not in HANDLERS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        return 2
    create_parser_for, _ = HANDLERS[command]
    return execute(command, create_parser_for().parse_args(args_list))


def create_completer() -> NestedCompleter:
    """Build completion for commands and their options."""
    options = {
        name: {option: None for option in spec["options"]}
        for name, spec in COMMANDS.items()
    }
    options.update({"help": None, "exit": None, "quit": None})
    return NestedCompleter.from_nested_dict(options)


def print_commands_list() -> None:
    print(f"\n{Colors.HEADER}{Colors.BOLD}Available commands{Colors.ENDC}")
    for name, spec in COMMANDS.items():
        print(f"  {Colors.BOLD}{name}{Colors.ENDC}  {spec['description']}")
        for option, text in spec["options"].items():
            print(f"      {option:<16} {text}")
    print("  exit             Leave interactive mode\n")


def run_interactive_mode() -> int:
    """Run in interactive mode with autocomplete."""
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )
    print_commands_list()

    while True:
        try:
            user_input = session.prompt("courtpairing> ").strip()
        except (EOFError, KeyboardInterrupt):
            break

        if not user_input:
            continue
        if user_input in ("exit", "quit", "q"):
            break
        if user_input in ("help", "?"):
            print_commands_list()
            continue

        try:
            parts = shlex.split(user_input)
        except ValueError as e:
            print(f"{Colors.FAIL}Could not parse input: {e}{Colors.ENDC}")
            continue
        try:
            run_command(parts[0], parts[1:])
        except SystemExit:
            # argparse exits on bad options; stay in the loop
            continue

    print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "interactive":
        return run_interactive_mode()
    if args.command in HANDLERS:
        return execute(args.command, args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
