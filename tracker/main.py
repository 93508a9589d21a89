"""Composition root for the business tracker.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Dependency injection
- Entry point selection (single command or interactive CLI)
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from tracker.adapters.cli.commands import COMMANDS, CLICommandHandler, run_command
from tracker.adapters.store.sqlite import SQLiteStores
from tracker.config import Settings, load_settings
from tracker.core.member_service import MemberService
from tracker.core.milestone_service import MilestoneService
from tracker.core.project_service import ProjectService
from tracker.core.roadmap_service import RoadmapService
from tracker.core.task_service import TaskService
from tracker.core.user_service import UserService


def build_cli_handler(stores: SQLiteStores) -> CLICommandHandler:
    """Wire core services over the given stores.

    Args:
        stores: Store adapters for every entity.

    Returns:
        CLICommandHandler delegating to the services.
    """
    return CLICommandHandler(
        users=UserService(stores.users),
        projects=ProjectService(stores.projects, stores.users),
        members=MemberService(stores.members, stores.projects, stores.users),
        roadmaps=RoadmapService(stores.roadmaps, stores.projects),
        milestones=MilestoneService(stores.milestones, stores.roadmaps),
        tasks=TaskService(stores.tasks, stores.milestones, stores.members),
    )


async def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for management commands.

    Args:
        cli_handler: CLICommandHandler instance for executing commands.
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive CLI. Type 'help' for available commands or 'exit' to quit.")

    loop = asyncio.get_running_loop()

    while True:
        try:
            # Read command from stdin in a thread to avoid blocking
            command_line = await loop.run_in_executor(None, input, "tracker> ")
            command_line = command_line.strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue
            if not isinstance(args, dict):
                logger.error("Command arguments must be a JSON object")
                continue

            try:
                result = await run_command(cli_handler, command, args)
                print(json.dumps(result, indent=2, default=str))
            except ValueError as e:
                print(json.dumps({"status": "error", "message": str(e)}, indent=2))
            except Exception as e:
                logger.error(f"Command {command} failed: {e}", exc_info=True)
                print(json.dumps({"status": "error", "message": str(e)}, indent=2))

        except EOFError:
            # Ctrl+D to exit
            logger.info("EOF received, exiting CLI")
            break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            continue


def _print_cli_help() -> None:
    """Print CLI help message."""
    lines = ["", "Available Commands (JSON arguments):", ""]
    for name, (_, required, optional) in COMMANDS.items():
        usage = ", ".join(required) or "-"
        if optional:
            usage += f" [optional: {', '.join(optional)}]"
        lines.append(f"  {name:<16} {usage}")
    lines.extend(
        [
            "",
            '  Example: add-member {"position": "Dev", "project_id": 1, "user_id": 1}',
            "",
            "  help  Show this help message.",
            "  exit  Exit the CLI.",
            "",
        ]
    )
    print("\n".join(lines))


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    With no command the interactive CLI starts.
    """
    parser = argparse.ArgumentParser(
        prog="tracker",
        description="Business tracker: manage users, projects and members",
    )
    parser.add_argument("command", nargs="?", choices=sorted(COMMANDS))
    parser.add_argument(
        "arguments",
        nargs="?",
        default="{}",
        help="Command arguments as a JSON object",
    )
    return parser.parse_args(argv)


async def bootstrap(
    argv: list[str] | None = None, settings: Settings | None = None
) -> int:
    """Load configuration, wire adapters, and run the requested command.

    This is the composition root: the single place where all components
    are instantiated and wired together.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate store adapters
    4. Initialize core services
    5. Run one command or the interactive CLI

    Returns:
        Process exit code (0 on success, 1 if the command failed).
    """
    args = parse_args(argv)

    # Step 1: Load configuration
    if settings is None:
        settings = load_settings()

    # Step 2: Configure logging
    configure_logging("DEBUG" if settings.debug else settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    # Step 3: Instantiate adapters
    stores = SQLiteStores(settings.store_sqlite_path, pool_size=settings.store_pool_size)
    logger.info(f"Store initialized: {settings.store_sqlite_path}")

    # Step 4: Initialize core services
    cli_handler = build_cli_handler(stores)

    # Step 5: Run
    try:
        if args.command is None:
            await _run_cli_interactive(cli_handler)
            return 0

        try:
            command_args: Any = json.loads(args.arguments)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON arguments: {e}")
            return 1
        if not isinstance(command_args, dict):
            logger.error("Command arguments must be a JSON object")
            return 1

        try:
            result = await run_command(cli_handler, args.command, command_args)
        except ValueError as e:
            logger.error(str(e))
            return 1

        print(json.dumps(result, indent=2, default=str))
        return 0 if result["status"] == "success" else 1

    finally:
        await stores.close_pool()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error, or failed command
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        exit_code = asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
