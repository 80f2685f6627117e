"""Fast Four console.

Runs one tournament at a time against a JSON history archive. Without
arguments it starts an interactive prompt with command completion.
"""

# Fast Four
# Copyright (C) 2025  Fast Four developers
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
import shlex
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from fastfour.archive import JsonHistoryArchive
from fastfour.cli.render import render_history, render_match, render_state
from fastfour.config import FastFourConfig, load_config
from fastfour.constants import DEFAULT_CONFIG_FILE
from fastfour.controllers.tournament import (
    ManualBracketBuilder,
    RandomShuffler,
    TournamentSession,
)
from fastfour.exceptions import FastFourException
from fastfour.models import Phase
from fastfour.utils import set_log_level, setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "start": {
        "description": "Set up a tournament from twelve names",
        "options": {"--date": "Tournament date (default: today)"},
    },
    "show": {"description": "Show groups, standings and current matches", "options": {}},
    "score": {
        "description": "Record a result: score MATCH_ID SCORE1 SCORE2",
        "options": {},
    },
    "unlock": {"description": "Reopen a recorded result: unlock MATCH_ID", "options": {}},
    "pair": {
        "description": "Stage a pairing for the next round: pair PLAYER1_ID PLAYER2_ID",
        "options": {"--clear": "Drop all staged pairings"},
    },
    "advance": {
        "description": "Open the next round from the staged pairings",
        "options": {
            "--phase": "Phase of the new round (GROUPS/PLAYOFFS)",
            "--label": "Label for every new match",
            "--require-complete": "Refuse while the current round is unfinished",
        },
    },
    "undo": {"description": "Roll back the current round", "options": {}},
    "finalize": {
        "description": "Archive the tournament: finalize [PLAYER_ID=POSITION ...]",
        "options": {"--id": "Record identifier"},
    },
    "history": {"description": "List archived tournaments", "options": {}},
    "save": {"description": "Save the running state: save [PATH]", "options": {}},
    "load": {"description": "Load a saved state: load [PATH]", "options": {}},
    "help": {"description": "Show commands or help for one command", "options": {}},
    "exit": {"description": "Leave the console", "options": {}},
}


def print_banner():
    """Print the application banner."""
    print(
        f"""
{Colors.OKBLUE}=== FAST FOUR - tournament console ==={Colors.ENDC}

Type {Colors.BOLD}help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave
"""
    )


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:10}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")
    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        completions[cmd] = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
    completions["help"] = WordCompleter(list(COMMANDS.keys()))
    return NestedCompleter.from_nested_dict(completions)


# ========== Command parsers ==========


def create_start_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="start", description="Set up a tournament")
    parser.add_argument("names", nargs="+", help="Twelve player names (quote names with spaces)")
    parser.add_argument("--date", help="Tournament date")
    return parser


def create_score_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="score", description="Record a result")
    parser.add_argument("match_id")
    parser.add_argument("score1", type=int)
    parser.add_argument("score2", type=int)
    return parser


def create_unlock_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="unlock", description="Reopen a result")
    parser.add_argument("match_id")
    return parser


def create_pair_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pair", description="Stage a pairing")
    parser.add_argument("player_ids", nargs="*")
    parser.add_argument("--clear", action="store_true")
    return parser


def create_advance_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="advance", description="Open the next round")
    parser.add_argument("--phase", choices=[Phase.GROUPS.value, Phase.PLAYOFFS.value])
    parser.add_argument("--label")
    parser.add_argument("--require-complete", action="store_true")
    return parser


def create_finalize_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finalize", description="Archive the tournament")
    parser.add_argument("positions", nargs="*", help="PLAYER_ID=POSITION pairs")
    parser.add_argument("--id", dest="record_id")
    return parser


def create_path_parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog)
    parser.add_argument("path", nargs="?")
    return parser


def parse_positions(items: List[str]) -> Dict[str, int]:
    """Parse ``PLAYER_ID=POSITION`` arguments.

    Raises:
        ValueError: On an item without ``=`` or with a non-integer position
    """
    positions = {}
    for item in items:
        player_id, sep, position = item.partition("=")
        if not sep or not player_id:
            raise ValueError(f"Expected PLAYER_ID=POSITION, got {item!r}")
        positions[player_id] = int(position)
    return positions


# ========== Console ==========


class FastFourConsole:
    """Dispatches console commands to a tournament session.

    Pairings entered with ``pair`` are staged here until ``advance`` turns
    them into the next round.
    """

    def __init__(self, session: TournamentSession, config: FastFourConfig):
        self.session = session
        self.config = config
        self.staged_pairings: List[Tuple[str, str]] = []

    def execute(self, command: str, args_list: List[str]) -> None:
        """Run one command.

        Raises:
            FastFourException: When the engine rejects the operation
            SystemExit: When argparse rejects the arguments
        """
        handler = getattr(self, f"cmd_{command}", None)
        if handler is None:
            print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
            return
        handler(args_list)

    def cmd_start(self, args_list: List[str]) -> None:
        args = create_start_parser().parse_args(args_list)
        state = self.session.start(args.names, args.date)
        self.staged_pairings = []
        print(f"{Colors.OKGREEN}Tournament started ({state.date}){Colors.ENDC}")
        print(render_state(state))

    def cmd_show(self, args_list: List[str]) -> None:
        print(render_state(self.session.state))
        if self.staged_pairings:
            print("\nStaged pairings:")
            for player1_id, player2_id in self.staged_pairings:
                print(f"  {player1_id} vs {player2_id}")

    def cmd_score(self, args_list: List[str]) -> None:
        args = create_score_parser().parse_args(args_list)
        state = self.session.record_result(args.match_id, args.score1, args.score2)
        print(render_match(state, state.get_match(args.match_id)))

    def cmd_unlock(self, args_list: List[str]) -> None:
        args = create_unlock_parser().parse_args(args_list)
        state = self.session.unlock_result(args.match_id)
        print(render_match(state, state.get_match(args.match_id)))

    def cmd_pair(self, args_list: List[str]) -> None:
        args = create_pair_parser().parse_args(args_list)
        if args.clear:
            self.staged_pairings = []
            print("Staged pairings cleared")
            return
        if len(args.player_ids) != 2:
            print(f"{Colors.FAIL}pair needs exactly two player ids{Colors.ENDC}")
            return
        self.staged_pairings.append((args.player_ids[0], args.player_ids[1]))
        print(f"Staged {args.player_ids[0]} vs {args.player_ids[1]}")

    def cmd_advance(self, args_list: List[str]) -> None:
        args = create_advance_parser().parse_args(args_list)
        if not self.staged_pairings:
            print(f"{Colors.WARNING}No pairings staged, use 'pair' first{Colors.ENDC}")
            return
        phase = Phase(args.phase) if args.phase else None
        builder = ManualBracketBuilder(self.staged_pairings, label=args.label, phase=phase)
        state = self.session.advance(
            builder, next_phase=phase, require_complete=args.require_complete
        )
        self.staged_pairings = []
        print(render_state(state))

    def cmd_undo(self, args_list: List[str]) -> None:
        state = self.session.undo()
        print(render_state(state))

    def cmd_finalize(self, args_list: List[str]) -> None:
        args = create_finalize_parser().parse_args(args_list)
        try:
            positions = parse_positions(args.positions)
        except ValueError as e:
            print(f"{Colors.FAIL}{e}{Colors.ENDC}")
            return
        record = self.session.finalize(positions or None, record_id=args.record_id)
        print(f"{Colors.OKGREEN}Tournament archived as {record.id}{Colors.ENDC}")

    def cmd_history(self, args_list: List[str]) -> None:
        print(render_history(self.session.history()))

    def cmd_save(self, args_list: List[str]) -> None:
        path = create_path_parser("save").parse_args(args_list).path or self.config.state_path
        self.session.save_state(path)
        print(f"{Colors.OKGREEN}Saved to {path}{Colors.ENDC}")

    def cmd_load(self, args_list: List[str]) -> None:
        path = create_path_parser("load").parse_args(args_list).path or self.config.state_path
        state = self.session.load_state(path)
        self.staged_pairings = []
        print(render_state(state))

    def cmd_help(self, args_list: List[str]) -> None:
        if args_list:
            print_command_help(args_list[0])
        else:
            print_commands_list()


def build_session(config: FastFourConfig) -> TournamentSession:
    return TournamentSession(
        JsonHistoryArchive(config.archive_path),
        shuffler=RandomShuffler(config.seed),
    )


def run_interactive_mode(console: FastFourConsole) -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    style = Style.from_dict({"prompt": "#00aa00 bold"})
    prompt_session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    while True:
        try:
            user_input = prompt_session.prompt("fastfour> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            try:
                parts = shlex.split(user_input)
            except ValueError as e:
                print(f"{Colors.FAIL}Could not parse input: {e}{Colors.ENDC}")
                continue

            command, args_list = parts[0], parts[1:]
            if command not in COMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}help{Colors.ENDC} to see available commands")
                continue

            try:
                console.execute(command, args_list)
            except SystemExit:
                # argparse calls sys.exit on error, catch it
                continue
            except FastFourException as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            except Exception as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception(f"Command {command!r} failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="fastfour",
        description="Fast Four tournament console",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  fastfour

  # Print archived tournaments
  fastfour --history --archive club_history.json

  # Reproducible seeding
  fastfour --interactive --seed 42
        """,
    )
    parser.add_argument("--archive", help="History archive file")
    parser.add_argument("--state", help="State file for save/load")
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_FILE, help="Configuration file (JSON)"
    )
    parser.add_argument("--seed", type=int, help="Shuffle seed")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level",
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )
    parser.add_argument(
        "--history", action="store_true", help="Print the archive and exit"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> FastFourConfig:
    """Command-line flags layered over the configuration file."""
    return load_config(args.config).with_overrides(
        archive_path=args.archive,
        state_path=args.state,
        log_level=args.log_level,
        seed=args.seed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the fastfour console."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
    except FastFourException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 2
    set_log_level(config.log_level)

    session = build_session(config)

    if args.history:
        try:
            print(render_history(session.history()))
        except FastFourException as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
            return 1
        return 0

    if Path(config.state_path).exists():
        try:
            session.load_state(config.state_path)
        except FastFourException as e:
            logger.warning(f"Ignoring saved state {config.state_path}: {e}")

    return run_interactive_mode(FastFourConsole(session, config))


if __name__ == "__main__":
    sys.exit(main())
