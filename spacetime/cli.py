"""
Spacetime CLI - Command-line interface for the engine.

Usage:
    spacetime demo [--turns N] [--seed S] [--json]   Run the starter scenario
    spacetime serve [--host H] [--port P]            Serve the HTTP API
"""

import argparse
import json
import logging
import os
import sys

LOG_LEVEL = os.getenv("SPACETIME_LOG_LEVEL", "WARNING")
DEFAULT_SEED = os.getenv("SPACETIME_DEFAULT_SEED")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Spacetime - Economic Simulation Engine",
        prog="spacetime",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level (default: SPACETIME_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run the starter scenario")
    demo_parser.add_argument("--turns", type=int, default=5, help="Number of turns to resolve")
    demo_parser.add_argument(
        "--seed",
        type=int,
        default=int(DEFAULT_SEED) if DEFAULT_SEED else None,
        help="Random seed (default: SPACETIME_DEFAULT_SEED or random)",
    )
    demo_parser.add_argument("--json", action="store_true", help="Print the final snapshot as JSON")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "demo":
        cmd_demo(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_demo(args):
    """Run the starter scenario for a number of turns."""
    from .scenarios import create_starter_state
    from .session import SessionManager

    if args.turns < 1:
        print("Error: --turns must be at least 1")
        sys.exit(1)

    manager = SessionManager()
    session = manager.create_session(create_starter_state(), seed=args.seed)
    results = manager.advance(session.session_id, args.turns)

    if args.json:
        from .api.schemas import GameStateModel

        snapshot = GameStateModel.from_state(session.game_state)
        print(json.dumps(snapshot.model_dump(mode="json"), indent=2))
        return

    print(f"Starter scenario, seed {session.seed}")
    for result in results:
        print(f"\n=== Turn {result.resolved_turn} ===")
        if not result.events:
            print("  (quiet turn)")
        for event in result.events:
            print(f"  [{event.priority.value:>8}] {event.title}")

    state = session.game_state
    print(f"\nTurn {state.turn}: {state.current_bp} BP, "
          f"{len(state.colonies)} colonies, {len(state.corporations)} corporations, "
          f"{len(state.discoveries)} discoveries, {len(state.schematics)} schematics, "
          f"{len(state.patents)} patents")


def cmd_serve(args):
    """Serve the HTTP API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install 'spacetime[server]'")
        sys.exit(1)

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
