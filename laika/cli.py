"""
Laika CLI - Command-line interface for the game service.

Usage:
    laika serve [--host H] [--port P] [--memory]   Run the REST API
    laika play [--player-id ID]                    Play against the computer
    laika show <game_id>                           Print a stored game
"""

import argparse
import sys

from .config import Config
from .logs import configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Laika - Tic-Tac-Toe game service",
        prog="laika",
    )
    parser.add_argument("--storage-path", help="Directory for game files (overrides STORAGE_PATH)")
    parser.add_argument("--log-level", help="Logging level (overrides LAIKA_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", help="Interface to bind")
    serve_parser.add_argument("--port", type=int, help="Port to listen on")
    serve_parser.add_argument("--memory", action="store_true", help="Keep games in memory only")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play against the computer in the terminal")
    play_parser.add_argument("--player-id", default="player", help="Your player id")

    # Show command
    show_parser = subparsers.add_parser("show", help="Print a stored game")
    show_parser.add_argument("game_id", help="Id of the game")

    args = parser.parse_args(argv)

    config = Config.from_env()
    if args.storage_path:
        config.storage_path = args.storage_path
    if args.log_level:
        config.log_level = args.log_level.upper()
    configure_logging(config.log_level)

    if args.command == "serve":
        cmd_serve(args, config)
    elif args.command == "play":
        cmd_play(args, config)
    elif args.command == "show":
        cmd_show(args, config)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args, config: Config):
    """Run the API with uvicorn."""
    import uvicorn
    from .api.app import create_app

    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    if args.memory:
        config.storage_kind = "memory"

    print(f"Listening on http://{config.address}")
    uvicorn.run(create_app(config=config), host=config.host, port=config.port, log_level=config.log_level.lower())


def cmd_play(args, config: Config):
    """Interactive game against the computer."""
    from .bots import create_policy
    from .engine_core.board import render
    from .engine_core.errors import GameError
    from .session import SessionManager
    from .storage import create_backend

    manager = SessionManager(
        storage=create_backend(config),
        policy=create_policy(config.bot_policy, seed=config.bot_seed),
    )
    try:
        session = manager.start_game(args.player_id)
    except GameError as e:
        print(f"Error: {e.message}")
        sys.exit(1)
    print(f"Game {session.id}")
    print("You are X. Enter a position 1-9, or q to quit.\n")

    while not session.is_complete:
        print(render(session))
        answer = input("\nYour move: ").strip().lower()
        if answer in ("q", "quit", "exit"):
            print(f"Game saved as {session.id}")
            return
        try:
            position = int(answer)
        except ValueError:
            print("Please enter a number from 1 to 9.")
            continue
        try:
            session = manager.play_move(session.id, args.player_id, position)
        except GameError as e:
            print(f"Move rejected: {e.message}")
            continue
        if session.moves and session.moves[-1].position != position:
            print(f"Computer plays {session.moves[-1].position}")
        print()

    print(render(session))
    _print_result(session)


def cmd_show(args, config: Config):
    """Print a stored game."""
    from .engine_core.board import render
    from .storage import StorageError, create_backend

    storage = create_backend(config)
    try:
        session = storage.load(args.game_id)
    except StorageError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Game {session.id} ({session.status.value})")
    print("Players: " + ", ".join(str(p) for p in session.players))
    print()
    print(render(session))
    if session.is_complete:
        _print_result(session)


def _print_result(session):
    if session.winner is not None:
        print(f"\n{session.winner} wins!")
    else:
        print("\nIt's a draw!")


if __name__ == "__main__":
    main()
