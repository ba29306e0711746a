"""Testing CLI for Cup Manager.

Simulates random cups and prints their tables, either as one-shot
commands or from an interactive prompt with autocomplete.
"""

# Cup Manager
# Copyright (C) 2025  Cup Manager developers
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
import sys
from typing import Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from cupmanager.constants import ENTITY_TOURNAMENTS
from cupmanager.exceptions import CupManagerException
from cupmanager.store import JsonFileStore
from cupmanager.testing.rtg import RandomCupGenerator, RCGConfig, ResultPattern
from cupmanager.tournament import Cup
from cupmanager.utils import setup_logger

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


SOURCE_OPTIONS = {
    "--seed": "Random seed of the simulated cup",
    "--pattern": "Result pattern (realistic/balanced/random)",
    "--file": "Read a saved cup (JSON) instead of simulating",
}

# Command definitions with their options
COMMANDS = {
    "simulate": {
        "description": "Play a random cup (RCG)",
        "options": {
            "--seed": "Random seed for reproducibility",
            "--pattern": "Result pattern (realistic/balanced/random)",
            "--output": "Save the cup to a JSON file",
        },
    },
    "standings": {"description": "Show the group tables", "options": SOURCE_OPTIONS},
    "scorers": {"description": "Show the top scorers", "options": SOURCE_OPTIONS},
    "goalkeepers": {"description": "Show the goalkeeper table", "options": SOURCE_OPTIONS},
    "bracket": {"description": "Show the knockout bracket", "options": SOURCE_OPTIONS},
    "help": {"description": "Show available commands", "options": {}},
    "exit": {"description": "Leave interactive mode", "options": {}},
}


class ShellState:
    """The cup most recently simulated or loaded in this session."""

    def __init__(self) -> None:
        self.cup: Optional[Cup] = None
        self.tournament_id: Optional[str] = None


def print_banner():
    """Print the application banner."""
    print(
        f"\n{Colors.OKBLUE}{Colors.BOLD}CUP MANAGER - TEST CLI{Colors.ENDC}\n\n"
        f"Type {Colors.BOLD}help{Colors.ENDC} to see all available commands\n"
        f"Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave\n"
    )


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:12}{Colors.ENDC} - {info['description']}")
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
            print(f"  {Colors.OKCYAN}{option:12}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions = {
        cmd: WordCompleter(list(info["options"].keys())) if info["options"] else None
        for cmd, info in COMMANDS.items()
    }
    completions["quit"] = None
    return NestedCompleter.from_nested_dict(completions)


# ========== Command Handlers ==========


def _simulate(seed: Optional[int], pattern: str, output: Optional[str], state: ShellState) -> Dict:
    config = RCGConfig(seed=seed, result_pattern=ResultPattern[pattern.upper()], output=output)
    generator = RandomCupGenerator(config)
    summary = generator.generate_complete_cup()
    state.cup = generator.cup
    state.tournament_id = summary["tournament_id"]
    return summary


def _load(path: str, state: ShellState) -> None:
    cup = Cup(JsonFileStore(path))
    tournament = cup.store.first(ENTITY_TOURNAMENTS)
    if tournament is None:
        raise CupManagerException(f"No tournament saved in {path}")
    state.cup = cup
    state.tournament_id = tournament["id"]


def resolve_cup(args: argparse.Namespace, state: ShellState) -> None:
    """Make ``state`` hold the cup the view commands should print."""
    if args.file:
        _load(args.file, state)
    elif args.seed is not None or state.cup is None:
        _simulate(args.seed, args.pattern, None, state)


def run_simulate_command(args: argparse.Namespace, state: ShellState) -> int:
    """Run the simulate (RCG) command."""
    print(f"\n{Colors.BOLD}Simulating cup...{Colors.ENDC}")
    summary = _simulate(args.seed, args.pattern, args.output, state)

    print(f"\n{Colors.BOLD}Cup Simulated:{Colors.ENDC}")
    print(f"  Champion:    {Colors.OKGREEN}{summary['champion']}{Colors.ENDC}")
    print(f"  Third place: {summary['third_place']}")
    if summary["top_scorers"]:
        best = summary["top_scorers"][0]
        print(f"  Top scorer:  {best['player_name']} ({best['team_name']}) {best['total_goals']}")
    if args.output:
        print(f"{Colors.OKGREEN}Cup saved to: {state.cup.store.path}{Colors.ENDC}")
    return 0


def run_standings_command(args: argparse.Namespace, state: ShellState) -> int:
    resolve_cup(args, state)
    for group in state.cup.get_groups(state.tournament_id):
        print(f"\n{Colors.BOLD}Group {group.label}{Colors.ENDC}")
        print(f"  {'#':>2} {'Team':16} {'P':>2} {'W':>2} {'D':>2} {'L':>2} {'GF':>3} {'GA':>3} {'GD':>4} {'Pts':>4}")
        for position, row in enumerate(state.cup.get_group_standings(group.id), start=1):
            color = Colors.OKGREEN if position <= 2 else ""
            print(
                f"  {color}{position:>2} {row.team.name:16} {row.played:>2} {row.won:>2} "
                f"{row.drawn:>2} {row.lost:>2} {row.goals_for:>3} {row.goals_against:>3} "
                f"{row.goal_difference:>4} {row.points:>4}{Colors.ENDC if color else ''}"
            )
    print()
    return 0


def run_scorers_command(args: argparse.Namespace, state: ShellState) -> int:
    resolve_cup(args, state)
    print(f"\n{Colors.BOLD}Top Scorers{Colors.ENDC}")
    for position, scorer in enumerate(state.cup.top_scorers(), start=1):
        print(f"  {position:>2} {scorer.player_name:14} {scorer.team_name:16} {scorer.total_goals:>3}")
    print()
    return 0


def run_goalkeepers_command(args: argparse.Namespace, state: ShellState) -> int:
    resolve_cup(args, state)
    print(f"\n{Colors.BOLD}Goalkeepers{Colors.ENDC}")
    for position, row in enumerate(state.cup.goalkeeper_ranking(), start=1):
        marker = "QF" if row.reached_quarterfinals else "  "
        print(
            f"  {position:>2} {row.goalkeeper.name:20} {marker} MP {row.matches_played:>2} "
            f"CS {row.clean_sheets:>2} GA {row.goals_conceded:>3} "
            f"AVG {row.average_goals_conceded:.2f}"
        )
    print()
    return 0


def run_bracket_command(args: argparse.Namespace, state: ShellState) -> int:
    resolve_cup(args, state)
    cup = state.cup
    names: Dict[Optional[str], str] = {None: "TBD"}
    for group in cup.get_groups(state.tournament_id):
        names.update({t.id: t.name for t in cup.get_teams_in_group(group.id)})

    for view in cup.get_knockout_phases(state.tournament_id):
        print(f"\n{Colors.BOLD}{view.phase.display_name}{Colors.ENDC}")
        for match in view.matches:
            score = "  -  "
            if match.home_score is not None:
                score = f"{match.home_score} - {match.away_score}"
                if match.went_to_penalties:
                    score += f" ({match.home_penalties}-{match.away_penalties} pens)"
            print(
                f"  {match.match_order}. {names.get(match.home_id, '?'):16} {score:18} "
                f"{names.get(match.away_id, '?')}"
            )
    print()
    return 0


HANDLERS = {
    "simulate": run_simulate_command,
    "standings": run_standings_command,
    "scorers": run_scorers_command,
    "goalkeepers": run_goalkeepers_command,
    "bracket": run_bracket_command,
}


# ========== Parsers ==========


def _add_pattern_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.REALISTIC.value,
    )


def create_command_parser(command: str) -> argparse.ArgumentParser:
    """Create the parser of one command (interactive mode)."""
    parser = argparse.ArgumentParser(prog=command, description=COMMANDS[command]["description"])
    parser.add_argument("--seed", type=int, help="Random seed")
    _add_pattern_argument(parser)
    if command == "simulate":
        parser.add_argument("--output", help="Save the cup to a JSON file")
    else:
        parser.add_argument("--file", help="Saved cup (JSON)")
    return parser


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="cup-test",
        description="Testing CLI for Cup Manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  cup-test

  # Play a reproducible cup and save it
  cup-test simulate --seed 7 --output cup.json

  # Show the tables of a saved cup
  cup-test standings --file cup.json
  cup-test bracket --file cup.json
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command in HANDLERS:
        sub = subparsers.add_parser(command, help=COMMANDS[command]["description"])
        sub.add_argument("--seed", type=int)
        _add_pattern_argument(sub)
        if command == "simulate":
            sub.add_argument("--output")
        else:
            sub.add_argument("--file")
        sub.set_defaults(func=HANDLERS[command])
    return parser


# ========== Modes ==========


def execute(line: str, state: ShellState) -> bool:
    """Run one interactive command line. Returns False when the shell should stop."""
    parts = line.split()
    if not parts:
        return True

    command = parts[0].lstrip("/")
    if command in ("exit", "quit", "q"):
        print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
        return False
    if command in ("help", "?"):
        if len(parts) > 1:
            print_command_help(parts[1].lstrip("/"))
        else:
            print_commands_list()
        return True
    if command not in HANDLERS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print(f"Type {Colors.BOLD}help{Colors.ENDC} to see available commands")
        return True

    try:
        args = create_command_parser(command).parse_args(parts[1:])
        HANDLERS[command](args, state)
    except SystemExit:
        # argparse calls sys.exit on error
        pass
    except CupManagerException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        logger.exception("Command execution failed")
    return True


def run_interactive_mode() -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )
    state = ShellState()

    while True:
        try:
            if not execute(session.prompt("cup-test> ").strip(), state):
                break
        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def run_standard_mode(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        return run_interactive_mode()
    if hasattr(args, "func"):
        try:
            return args.func(args, ShellState())
        except CupManagerException as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            return 1
    parser.print_help()
    return 0


def main() -> int:
    """Main entry point for cup-test CLI."""
    if len(sys.argv) == 1 or "--interactive" in sys.argv or "-i" in sys.argv:
        return run_interactive_mode()
    return run_standard_mode()


if __name__ == "__main__":
    sys.exit(main())
