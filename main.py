"""Main execution script for the Submission Link Checker."""

import argparse
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

# Environment must be populated before config reads it
load_dotenv()

import config
from utils.logger import setup_logger
from utils.error_handler import APIError, ConfigError, GradingError, UserCancelledError
from services.github_api import GitHubService
from services.web_probe import LinkProber
from services.drive_api import DriveService
from api_clients import build_http_session
from core.grader import Grader
from core.history import RecentResults
from core import export, rules
import ui.cli as cli

logger = setup_logger()

def build_grader() -> Grader:
    """Wires the services into a Grader; Drive API lookups only with an API key."""
    session = build_http_session()
    drive_service = None
    if config.GOOGLE_API_KEY:
        try:
            drive_service = DriveService(config.GOOGLE_API_KEY)
        except (ConfigError, APIError) as e:
            logger.error(f"Drive client unavailable: {e}")
            cli.display_warning(f"Could not initialize the Drive client: {e}. Drive links will be probed over HTTP.")
    return Grader(GitHubService(session), LinkProber(session), drive_service)

def check_submission(grader: Grader, history: RecentResults, link: str, assignment_type: str) -> Dict[str, Any]:
    """Grades one link, shows the card and records it in the history."""
    with cli.console.status("Checking submission..."):
        result = grader.grade(link, assignment_type)
    cli.render_result_card(result)
    history.save(result)
    return result

def export_last(result: Optional[Dict[str, Any]], fmt: str):
    path = export.export_result(result, fmt)
    if path:
        cli.display_success(f"Exported {fmt.upper()} to {path}")
    else:
        cli.display_warning("Nothing to export yet. Check a submission first.")

def interactive(grader: Grader, history: RecentResults):
    """Menu loop mirroring the form: check, browse recent results, export."""
    cli.display_welcome()
    cli.render_recent_results(history.load())

    # Only a check or an opened recent result becomes exportable
    last_result: Optional[Dict[str, Any]] = None
    assignment_types: List[str] = rules.get_assignment_types()

    while True:
        action = cli.prompt_for_menu_action()
        try:
            if action == 'q':
                break
            if action == 'c':
                link = cli.prompt_for_link()
                assignment_type = cli.prompt_for_selection(assignment_types, str, "Select the assignment type:")
                if not assignment_type:
                    continue
                last_result = check_submission(grader, history, link, assignment_type)
                cli.render_recent_results(history.load())
            elif action == 'r':
                records = history.load()
                selected = cli.prompt_for_selection(records, cli.format_record_for_display, "Open a recent result:")
                if selected:
                    last_result = selected
                    cli.render_result_card(selected)
            elif action == 'e':
                export_last(last_result, cli.prompt_for_export_format())
        except UserCancelledError as e:
            logger.info(f"Operation cancelled by user: {e}")
            cli.display_warning(f"Cancelled: {e}")
        except GradingError as e:
            logger.warning(f"Grading error: {e}")
            cli.display_error(str(e))

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="grader",
        description="Check a submission link and score it. Runs interactively without arguments."
    )
    parser.add_argument("link", nargs="?", help="GitHub repository, GitHub Pages or Google Drive link")
    parser.add_argument("assignment_type", nargs="?", help="Assignment type, e.g. 'Web Development'")
    parser.add_argument("--export", choices=export.EXPORT_FORMATS, help="Write the result as CSV or JSON")
    parser.add_argument("--recent", action="store_true", help="Show the recent results and exit")
    return parser.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    args = parse_args(argv)
    logger.info("Starting Submission Link Checker.")
    history = RecentResults()

    try:
        if args.recent:
            cli.render_recent_results(history.load())
            return 0

        grader = build_grader()

        if args.link:
            if not args.assignment_type:
                cli.display_error("An assignment type is required with a link.")
                return 2
            if args.assignment_type not in rules.get_assignment_types():
                cli.display_warning(f"'{args.assignment_type}' has no file rules; only accessibility will score.")
            result = check_submission(grader, history, args.link, args.assignment_type)
            if args.export:
                export_last(result, args.export)
            return 0

        interactive(grader, history)
        return 0
    except ConfigError as e:
        logger.critical(f"Configuration error: {e}", exc_info=config.DEBUG)
        cli.display_error(f"Setup Error: {e}")
        return 1
    except GradingError as e:
        logger.error(f"Grading error: {e}")
        cli.display_error(str(e))
        return 1
    except (UserCancelledError, KeyboardInterrupt):
        logger.info("Operation interrupted by user.")
        cli.display_warning("Operation interrupted.")
        return 130
    except Exception as e:
        logger.critical(f"An unexpected error occurred: {e}", exc_info=True)
        cli.display_error(f"An unexpected error occurred: {e}. Check logs for details.")
        return 1
    finally:
        if not args.link and not args.recent:
            cli.display_farewell()

def run():
    sys.exit(main())

if __name__ == "__main__":
    run()
