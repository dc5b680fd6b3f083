"""
Wonders CLI - Command-line interface for the engine.

Usage:
    wonders games              List playable games
    wonders show <game>        Print the starting board
    wonders validate           Build and check every board topology
    wonders play <game>        Play a game at the terminal (both sides)
"""

import argparse
import logging
import os
import sys

from .engine_core.state import Die, GameState, PlayerColor
from .engine_core.topology import TopologyError
from .games import GAMES, get_rules

WONDERS_LOG_LEVEL = os.getenv("WONDERS_LOG_LEVEL", "WARNING")

PLAY_HELP = """Commands:
  select <key...>   click a cell, e.g. 'select 9 4' or 'select garden 1'
  move <n>          apply highlighted move n
  action <name>     choose a named action (Statue: place, diminish)
  cancel            cancel the current selection
  end               end a chain that may stop early
  reset             start over
  board             print the board again
  quit              leave the game"""


def main(argv=None):
    """Main CLI entry point."""
    logging.basicConfig(
        level=WONDERS_LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    parser = argparse.ArgumentParser(
        description="Wonders - rule engine for the seven Wonders board games",
        prog="wonders",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("games", help="List playable games")

    show_parser = subparsers.add_parser("show", help="Print a game's starting board")
    show_parser.add_argument("game", choices=sorted(GAMES), help="Game id")

    subparsers.add_parser("validate", help="Check every board topology")

    play_parser = subparsers.add_parser("play", help="Play a game at the terminal")
    play_parser.add_argument("game", choices=sorted(GAMES), help="Game id")

    args = parser.parse_args(argv)

    if args.command == "games":
        cmd_games(args)
    elif args.command == "show":
        cmd_show(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "play":
        cmd_play(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_games(args):
    """List playable games."""
    for game_id in GAMES:
        rules = get_rules(game_id)
        print(f"{game_id:<10} {rules.title}: {rules.summary}")


def cmd_show(args):
    """Print the starting board."""
    rules = get_rules(args.game)
    print(render_board(rules.initial_state()))


def cmd_validate(args):
    """Build every topology; construction runs the consistency checks."""
    failed = False
    for game_id, rules_class in GAMES.items():
        try:
            rules = rules_class()
        except TopologyError as e:
            failed = True
            print(f"{game_id}: INVALID")
            for error in e.errors:
                print(f"  - {error}")
            continue
        print(f"{game_id}: ok ({len(rules.topology)} cells)")
    if failed:
        sys.exit(1)


def cmd_play(args):
    """Interactive hot-seat game."""
    from .session import SessionManager

    manager = SessionManager()
    session = manager.create_session(args.game)
    print(f"{session.controller.rules.title} - type 'help' for commands")
    print(render_board(session.game_state))

    while True:
        state = session.game_state
        prompt = f"[{state.current_player.title} {state.phase.value}]> "
        try:
            line = input(prompt).strip()
        except EOFError:
            break
        if not line:
            continue
        command, *rest = line.split()

        if command in ("quit", "exit"):
            break
        if command == "help":
            print(PLAY_HELP)
            continue
        if command == "board":
            print(render_board(state))
            continue

        if command == "select":
            result = session.select(parse_cell(rest))
        elif command == "move" and len(rest) == 1 and rest[0].isdigit():
            result = session.move(int(rest[0]))
        elif command == "action" and len(rest) == 1:
            result = session.choose_action(rest[0])
        elif command == "cancel":
            result = session.cancel()
        elif command == "end":
            result = session.end_turn()
        elif command == "reset":
            result = session.reset()
        else:
            print("Unknown command. Type 'help'.")
            continue

        if not result.success:
            print(f"Error: {result.error}")
            continue
        for event in result.events:
            print(f"* {event}")
        print(render_board(session.game_state))

    manager.end_session(session.session_id, reason="quit")


def parse_cell(tokens):
    """'9 4' -> (9, 4); 'garden 1' -> ('garden', 1); a single number is a node index."""
    values = tuple(int(t) if t.lstrip("-").isdigit() else t for t in tokens)
    if len(values) == 1 and isinstance(values[0], int):
        return values[0]
    return values


def occupant_symbol(occupant):
    if occupant is None or occupant == ():
        return "."
    if isinstance(occupant, PlayerColor):
        return occupant.value[0].upper()
    if isinstance(occupant, Die):
        return f"{occupant.owner.value[0]}{occupant.value}"
    return "".join(disc.value[0].upper() for disc in occupant)


def render_board(state: GameState) -> str:
    """Text board: cells grouped into rows by layout position, then the moves on offer."""
    topology = state.topology
    rows = {}
    for node in topology.nodes:
        rows.setdefault(round(node.position[1], 1), []).append(node)

    lines = []
    for y in sorted(rows):
        cells = sorted(rows[y], key=lambda node: node.position[0])
        lines.append("  ".join(
            f"{occupant_symbol(state.board[node.index])}" for node in cells
        ))

    lines.append(f"Turn {state.turn_number}: {state.current_player.title} to play")
    if state.reserves:
        lines.append("Reserve: " + ", ".join(
            f"{color.title} {count}" for color, count in state.reserves.items()
        ))
    if state.turn.origin is not None:
        lines.append(f"Selected: {topology.key(state.turn.origin)}")
    for i, move in enumerate(state.legal_moves):
        lines.append(f"  {i}: {move.describe(topology)}")
    if state.outcome is not None:
        lines.append(state.outcome.describe())
    return "\n".join(lines)


if __name__ == "__main__":
    main()
