#!/usr/bin/env python3
"""Play Puli Meka against an AI tier via the console, with optional logging & replay."""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pulimeka import AIConfig, load_ai_config
from pulimeka.core import (
    Difficulty,
    GameResult,
    GameState,
    Move,
    Role,
    decode_move,
    encode_move,
    enumerate_moves,
    has_any_move,
    initialize_game_state,
    play_move,
    render_board,
    undo,
)


def format_move(move: Move) -> str:
    if move.is_placement:
        return f"place {move.destination}"
    arrow = "x>" if move.is_capture else "->"
    return f"{move.source} {arrow} {move.destination}"


def describe(state: GameState) -> str:
    return (
        f"{render_board(state.board)}\n"
        f"to move: {state.turn.name}  phase: {state.phase.value}  "
        f"goats in hand: {state.goats_remaining}  captured: {state.goats_captured}/8"
    )


def prompt_human_move(state: GameState) -> Optional[Move]:
    """Ask for a move; ``None`` means the player asked to undo."""
    moves = enumerate_moves(state.board, state.turn, state.goats_placed)
    by_index = {encode_move(move): move for move in moves}
    print("Legal moves:")
    for idx, move in by_index.items():
        print(f"  {idx}: {format_move(move)}")
    while True:
        raw = input("Move index (u to undo, q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        if raw.lower() in {"u", "undo"}:
            return None
        if not raw.isdigit():
            print("Please enter a number.")
            continue
        idx = int(raw)
        if idx in by_index:
            return by_index[idx]
        print("Not a legal move index, try again.")


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Saved game log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    moves = data.get("moves", [])
    state = initialize_game_state()
    if verbose:
        print("Replaying logged game.")
        print(describe(state))
    for entry in moves:
        move = decode_move(int(entry["action_index"]), state.board)
        state = play_move(state, move)
        if verbose:
            print(f"{entry.get('actor', 'unknown')} ({entry.get('role', '?')}): {format_move(move)}")
            print(describe(state))
    summary = {
        "result": state.result.value,
        "reason": state.reason,
        "moves": len(moves),
        "goats_captured": state.goats_captured,
        "board": state.board.tolist(),
    }
    if verbose:
        print("Replay finished.")
        print(f"Result: {summary['result']}")
    return summary


def play_interactive(args: argparse.Namespace) -> None:
    if args.config:
        ai_config = load_ai_config(args.config)
    else:
        ai_config = AIConfig()
    if args.difficulty:
        ai_config.difficulty = Difficulty(args.difficulty)
    if args.ai_role:
        ai_config.ai_role = Role[args.ai_role.upper()]
    if args.seed is not None:
        ai_config.seed = args.seed
    policy_ai = ai_config.build_policy()
    print(f"AI plays {ai_config.ai_role.name} at {ai_config.difficulty.value} difficulty.")

    log_records: List[Dict] = []
    state = initialize_game_state()

    while not state.is_terminal:
        print()
        print(describe(state))
        if state.turn == ai_config.ai_role:
            move = policy_ai.select(state)
            if move is None:
                print(f"AI ({state.turn.name}) has no legal move.")
                break
            actor = "ai"
            print(f"AI ({state.turn.name}): {format_move(move)}")
        else:
            if not has_any_move(state.board, state.turn, state.goats_placed):
                print(f"{state.turn.name} has no legal move.")
                break
            move = prompt_human_move(state)
            if move is None:
                # undo back to the previous human turn
                while state.history:
                    state = undo(state)
                    if log_records:
                        log_records.pop()
                    if state.turn != ai_config.ai_role:
                        break
                continue
            actor = "human"

        log_records.append(
            {
                "move_index": len(log_records),
                "actor": actor,
                "role": state.turn.name.lower(),
                "action_index": encode_move(move),
                "from": move.source,
                "to": move.destination,
            }
        )
        state = play_move(state, move)

    print("\nFinal board:")
    print(describe(state))
    if state.result == GameResult.TIGER_WIN:
        print(f"Tigers win ({state.reason}).")
    elif state.result == GameResult.GOAT_WIN:
        print(f"Goats win ({state.reason}).")
    else:
        print("Game ended without a winner.")

    if args.log_file:
        metadata = {
            "ai_role": ai_config.ai_role.name.lower(),
            "difficulty": ai_config.difficulty.value,
            "seed": ai_config.seed,
            "result": state.result.value,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Puli Meka in the console against the AI.")
    parser.add_argument("--config", help="YAML AI config", default=None)
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty])
    parser.add_argument("--ai-role", choices=["tiger", "goat"])
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
