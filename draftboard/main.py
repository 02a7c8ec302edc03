"""
Main CLI entry point for the fantasy football ADP draft board.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .feed_fetcher import FeedFetcher
from .draft.board_session import BoardSession
from .draft.team_name_store import TeamNameStore
from .output_writer import OutputWriter, board_to_dataframe


def setup_logging(verbose: bool = False):
    """
    Configure logging for the application.

    Args:
        verbose: Enable verbose (DEBUG) logging
    """
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL)
    logging.basicConfig(
        level=level,
        format=config.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Fantasy Football ADP Draft Board',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the ESPN board
  python -m draftboard.main --source ESPN

  # Serve the board API
  python -m draftboard.main --serve --port 8000

  # Keep draft picks between runs
  python -m draftboard.main --serve --checkpoint data/draft_checkpoints/league.json

  # Fill a source without a feed file with mock players
  python -m draftboard.main --mock-source Underdog --source Underdog

  # Export the Sleeper board and every roster
  python -m draftboard.main --source Sleeper --output sleeper_board.csv --rosters-output rosters.csv
        """
    )

    parser.add_argument(
        '--data-dir',
        type=str,
        default=config.DATA_DIR,
        help=f'Directory holding the ADP feed files (default: {config.DATA_DIR})'
    )

    parser.add_argument(
        '--source',
        type=str,
        default=config.DEFAULT_SOURCE,
        help=f'ADP source to display (default: {config.DEFAULT_SOURCE})'
    )

    parser.add_argument(
        '--teams',
        type=int,
        default=config.NUM_TEAMS,
        help=f'Number of teams in the league (default: {config.NUM_TEAMS})'
    )

    parser.add_argument(
        '--team-names-file',
        type=str,
        default=config.TEAM_NAMES_FILE,
        help=f'JSON file with stored team names (default: {config.TEAM_NAMES_FILE})'
    )

    parser.add_argument(
        '--checkpoint',
        type=str,
        default=None,
        help='JSON checkpoint to load draft picks from and save them to (optional)'
    )

    parser.add_argument(
        '--mock-source',
        action='append',
        default=[],
        help='Add a source filled with mock players (repeatable)'
    )

    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Write the displayed board to this CSV file'
    )

    parser.add_argument(
        '--rosters-output',
        type=str,
        default=None,
        help='Write every team roster to this CSV file'
    )

    parser.add_argument(
        '--available-only',
        action='store_true',
        help='Leave drafted players off the printed board'
    )

    parser.add_argument(
        '--summary',
        action='store_true',
        help='Print per-team roster counts after the board'
    )

    parser.add_argument(
        '--serve',
        action='store_true',
        help='Serve the board API instead of printing the board'
    )

    parser.add_argument(
        '--host',
        type=str,
        default=config.API_HOST,
        help=f'API host (default: {config.API_HOST})'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=config.API_PORT,
        help=f'API port (default: {config.API_PORT})'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Hide the feed download progress bar'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser.parse_args(argv)


def build_session(args) -> BoardSession:
    """Load every feed into a new session."""
    logger = logging.getLogger(__name__)

    session = BoardSession(
        num_teams=args.teams,
        team_name_store=TeamNameStore(Path(args.team_names_file)),
        checkpoint_path=Path(args.checkpoint) if args.checkpoint else None,
    )

    fetcher = FeedFetcher(data_dir=args.data_dir, show_progress=not args.no_progress)
    session.load_feeds(fetcher)

    for source in args.mock_source:
        session.add_mock_source(source)

    if args.source in session.adp_data:
        session.select_source(args.source)
    else:
        logger.warning(f"Unknown source {args.source}, showing {session.current_source}")

    return session


def run_print_mode(session: BoardSession, args):
    """Print the board and current roster, and write optional CSV exports."""
    logger = logging.getLogger(__name__)

    cells = session.board(available_only=args.available_only)
    if cells:
        print(board_to_dataframe(cells).to_string())
    else:
        print(session.empty_message())

    current = session.state.current_team
    print(f"\n{session.manager.team_name(current)}")
    for line in session.roster_lines():
        print(f"  {line}")

    if args.summary:
        print()
        print(session.manager.get_team_summary().to_string(index=False))

    writer = OutputWriter()
    if args.output:
        writer.write_board(cells, args.output)
    if args.rosters_output:
        writer.write_rosters(session, args.rosters_output)

    logger.info(f"Board: {session.current_source} | Drafted: {session.state.total_drafted()}")


def run_server_mode(session: BoardSession, args):
    """Serve the board API with uvicorn."""
    import uvicorn

    from .draft.api_server import create_app

    logger = logging.getLogger(__name__)
    logger.info(f"Serving draft board on http://{args.host}:{args.port}")

    uvicorn.run(create_app(session), host=args.host, port=args.port)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    try:
        session = build_session(args)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Failed to start draft board: {e}")
        sys.exit(1)

    if args.serve:
        run_server_mode(session, args)
    else:
        run_print_mode(session, args)


if __name__ == '__main__':
    main()
