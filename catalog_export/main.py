"""Command-line entry point for the catalog export service.

Usage:
    catalog-export serve
    catalog-export export <json|xlsx|xml> [output_dir]
    catalog-export clean
"""

import sys
from typing import List, Optional

from .config import Config
from .core import DatabaseCleaner, ExportError, ProductRepository
from .core.export_service import ExportService
from .logger.logger import Logger
from .utils import ProgressTracker

USAGE = (
    "Usage:\n"
    "  catalog-export serve\n"
    "  catalog-export export <json|xlsx|xml> [output_dir]\n"
    "  catalog-export clean"
)


def load_repository(config: Config) -> ProductRepository:
    return ProductRepository.from_file(config.products_file, config.default_currency)


def run_server(config: Config) -> int:
    """Serve the API with uvicorn."""
    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(config), host=config.host, port=config.port)
    return 0


def run_export(
        config: Config,
        requested_format: str,
        output_dir: Optional[str] = None,
        tracker: Optional[ProgressTracker] = None
) -> int:
    """Write the catalog to a timestamped export file."""
    tracker = tracker or ProgressTracker()
    repository = load_repository(config)
    service = ExportService.from_config(config)

    tracker.print_header(f"Exporting {repository.count()} products as {requested_format}")
    try:
        with tracker.create_progress_bar() as progress:
            path = service.export_to_file(
                requested_format,
                repository.find_all,
                output_dir or config.export_dir,
                progress=progress
            )
    except ExportError as e:
        tracker.print_error(f"Export failed: {e.message}")
        Logger.error(f"Export failed: {e.message}")
        return 1

    tracker.print_success(f"Export written to {path}")
    return 0


def run_clean(config: Config, tracker: Optional[ProgressTracker] = None) -> int:
    """Remove categories and attributes that no product uses."""
    tracker = tracker or ProgressTracker()
    repository = load_repository(config)
    cleaner = DatabaseCleaner(repository)

    try:
        result = cleaner.clean()
        if result.removed_categories or result.removed_attributes:
            repository.save(config.products_file)
    except Exception as e:
        tracker.print_error(f"Error cleaning database structure: {e}")
        Logger.error(f"Database clean failed: {e}", exc_info=True)
        return 1

    if result.removed_categories <= 0:
        tracker.print_warning("No unused categories found.")
    if result.removed_attributes <= 0:
        tracker.print_warning("No unused attributes found.")
    tracker.print_success("Database structure cleaned!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = sys.argv[1:] if argv is None else argv
    tracker = ProgressTracker()

    if not args or args[0] not in ("serve", "export", "clean"):
        tracker.print_info(USAGE)
        return 1

    try:
        config = Config()
    except RuntimeError as e:
        tracker.print_error(str(e))
        return 1

    Logger.setup(level=config.log_level)

    command = args[0]
    if command == "serve":
        return run_server(config)
    if command == "export":
        if len(args) < 2:
            tracker.print_info(USAGE)
            return 1
        output_dir = args[2] if len(args) > 2 else None
        return run_export(config, args[1], output_dir, tracker)
    return run_clean(config, tracker)


if __name__ == "__main__":
    sys.exit(main())
