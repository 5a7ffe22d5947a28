"""
Whot CLI - Command-line interface for the engine.

Usage:
    whot play [--seed N] [--name NAME] [--delay S]   Play the computer in the terminal
    whot serve [--host H] [--port P]                 Run the HTTP API
"""

import argparse
import logging
import os
import sys
import time

from .config import LOG_LEVEL


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Whot - Card Game Rules Engine",
        prog="whot",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play against the computer")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible game")
    play_parser.add_argument("--name", default="You", help="Your display name")
    play_parser.add_argument("--delay", type=float, default=1.0, help="Seconds between computer moves")
    play_parser.add_argument("--ledger", default=None, help="GraphQL endpoint mirroring your moves")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    serve_parser.add_argument("--port", type=int, default=int(os.getenv("PORT", 8000)))
    serve_parser.add_argument("--reload", action="store_true")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args):
    """Interactive game in the terminal."""
    from .config import create_rules
    from .engine_core.state import GameStatus
    from .session import SessionManager, GameLoop, create_ledger_sink

    config = create_rules(human_name=args.name, bot_delay_seconds=args.delay)
    manager = SessionManager()
    session = manager.create_session(
        config=config,
        seed=args.seed,
        ledger=create_ledger_sink(args.ledger),
    )
    # Computer moves are stepped here so each one can be shown
    loop = GameLoop(session, auto_bot_turns=False)

    _print_changes(loop.start_new_game().state_changes)
    print("Commands: <number> play card, d draw, e end turn, r restart, q quit\n")

    while True:
        match = session.match

        if match.status is GameStatus.FINISHED:
            winner = match.get_player(match.winner_id)
            print(f"\nGame over. {winner.name} won.")
            if _ask("Play again? [y/N] ").lower() != "y":
                break
            _print_changes(loop.start_new_game().state_changes)
            continue

        if match.current_player.is_computer:
            time.sleep(config.bot_delay_seconds)
            step = loop.bot_step()
            _print_changes(step.state_changes, prefix="  ")
            if not step.success:
                print(f"Computer is stuck: {step.error}")
                break
            continue

        view = loop.snapshot()
        _render(view)

        if match.awaiting_shape:
            shape = _ask("Choose a shape (circle, triangle, square, star, cross): ")
            result = loop.choose_wild_shape(shape, session.human_player_id)
        else:
            command = _ask("> ").lower()
            if command == "q":
                break
            if command == "r":
                result = loop.start_new_game()
            elif command == "d":
                result = loop.draw_card(session.human_player_id)
            elif command == "e":
                result = loop.end_turn(session.human_player_id)
            elif command.isdigit():
                me = view.players[0]
                idx = int(command) - 1
                if not 0 <= idx < len(me.hand or []):
                    print("No such card")
                    continue
                result = loop.play_card(me.hand[idx].card_id, session.human_player_id)
            else:
                print("Unknown command")
                continue

        if result.success:
            _print_changes(result.state_changes)
        else:
            print(f"! {result.error}")

    manager.end_session(session.session_id)


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    print(f"Starting Whot API on {args.host}:{args.port}")
    print(f"Docs available at: http://{args.host}:{args.port}/api/docs")
    uvicorn.run(
        "whot.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


def _ask(prompt):
    try:
        return input(prompt).strip()
    except EOFError:
        return "q"


def _print_changes(changes, prefix=""):
    for change in changes:
        print(f"{prefix}{change}")


def _render(view):
    top = view.top_card.label if view.top_card else "-"
    print(f"\nTop card: {top}   Market: {view.draw_pile_count} cards")
    if view.shape_demand:
        print(f"Whot demand: {view.shape_demand.upper()}")
    if view.pending_penalty:
        print(f"You owe {view.pending_penalty} cards")
    if view.awaiting_hold_on:
        print("Hold on: play any card, or draw")
    if view.awaiting_suspension:
        print("Suspension: play again, draw, or end turn")
    for player in view.players:
        if player.hand is None:
            print(f"{player.name}: {player.hand_count} cards")
    me = view.players[0]
    for i, card in enumerate(me.hand or [], start=1):
        print(f"  {i:2d}. {card.label}")


if __name__ == "__main__":
    main()
