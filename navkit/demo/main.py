"""NavKit demo - scripted walkthroughs of the issue picker flow."""

from __future__ import annotations

import asyncio
import logging
import logging.handlers
from pathlib import Path
from typing import Callable, Awaitable, List, Optional, Tuple

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from navkit.demo.features import assets_list, asset_detail, issues_picker
from navkit.demo.state import Store
from navkit.shared.core.configuration import LoggingConfig, SystemConfig, get_config
from navkit.shared.core.service_registry import run_cleanup_handlers

# Load environment variables from .env file in project root
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

logger = logging.getLogger(__name__)

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(config: LoggingConfig, console: Optional[Console] = None) -> None:
    """Configure root logging: optional rotating file plus a rich console handler."""
    file_log_level = LOG_LEVEL_MAP.get(config.level.upper(), logging.INFO)
    console_log_level = LOG_LEVEL_MAP.get(config.console_level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(file_log_level, console_log_level))

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if config.log_file:
        log_file_path = Path(config.log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(file_log_level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root_logger.addHandler(file_handler)

    console_handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    console_handler.setLevel(console_log_level)
    root_logger.addHandler(console_handler)

    # Suppress verbose asyncio debug logs
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger.info(f"Logging configured: file={config.log_file or 'disabled'}, console={config.console_level}")


async def _open_picker(store: Store, asset_id: str) -> Tuple[asset_detail.AssetDetailFeature, issues_picker.IssuesPickerFeature]:
    """Tap an asset, open its detail, tap "link issue" and load the picker."""
    await store.assets_list.send(assets_list.AssetTapped(asset_id=asset_id))
    detail = store.current_screen()
    await detail.send(asset_detail.OnAppear())
    await detail.wait_for_effects()

    await detail.send(asset_detail.LinkIssueTapped())
    # Let the effect push the picker
    await asyncio.sleep(0)
    picker = store.current_screen()
    await picker.send(issues_picker.OnAppear())
    await picker.wait_for_effects()
    return detail, picker


async def walkthrough_select(store: Store) -> asset_detail.AssetDetailFeature:
    detail, picker = await _open_picker(store, "1")
    issue = picker.find_issue("2")
    await picker.send(issues_picker.IssueSelected(issue=issue))
    await detail.wait_for_effects()
    return detail


async def walkthrough_cancel(store: Store) -> asset_detail.AssetDetailFeature:
    detail, picker = await _open_picker(store, "2")
    await picker.send(issues_picker.CancelTapped())
    await detail.wait_for_effects()
    return detail


async def walkthrough_back_gesture(store: Store) -> asset_detail.AssetDetailFeature:
    detail, _ = await _open_picker(store, "3")
    # The user swipes back: the stack shrinks with no envelope published
    store.stack.pop()
    await detail.wait_for_effects()
    return detail


WALKTHROUGHS: List[Tuple[str, Callable[[Store], Awaitable[asset_detail.AssetDetailFeature]]]] = [
    ("select issue", walkthrough_select),
    ("cancel picker", walkthrough_cancel),
    ("back gesture", walkthrough_back_gesture),
]


async def run_demo(config: SystemConfig, console: Console) -> Table:
    table = Table(title="NavKit issue picker walkthroughs")
    table.add_column("Walkthrough")
    table.add_column("Asset")
    table.add_column("Linked issue")
    table.add_column("Session outcome")
    table.add_column("Stack after")

    for title, walkthrough in WALKTHROUGHS:
        store = Store(config)
        await store.initialize()
        try:
            detail = await walkthrough(store)
            last = store.coordinator.registry.last_session
            linked = detail.state.linked_issue
            table.add_row(
                title,
                detail.state.asset_id,
                f"{linked.id}: {linked.title}" if linked else "-",
                last.reason.value if last and last.reason else "-",
                " > ".join(str(route) for route in store.stack.snapshot().entries),
            )
        finally:
            await store.shutdown()

    console.print(table)
    return table


def main() -> None:
    """Entry point: load config, set up logging and run the walkthroughs."""
    console = Console()
    config = get_config()
    configure_logging(config.logging, console)
    logger.info("Starting NavKit demo")
    try:
        asyncio.run(run_demo(config, console))
    finally:
        run_cleanup_handlers()


if __name__ == "__main__":
    main()
