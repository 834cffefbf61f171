import argparse
import logging
import sys

from dotenv import load_dotenv

from .core.config import load_settings
from .core.convert import transform_file
from .core.syntax import SourceParseError, iter_source_files


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """Main entry point for hookify."""
    parser = argparse.ArgumentParser(
        description="hookify - convert class components to hook-based function components"
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="Source files or directories to convert in place"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print converted sources to stdout instead of writing them"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML settings file (default: config/hookify.yaml)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    load_dotenv()
    settings = load_settings(args.config)

    failed = 0
    converted = 0
    files = 0
    for path in args.paths:
        for file_path in iter_source_files(path):
            files += 1
            try:
                result = transform_file(file_path, settings, write=not args.dry_run)
            except SourceParseError as e:
                logger.error(f"Parse error: {e}")
                failed += 1
                continue
            except (OSError, ValueError) as e:
                logger.error(f"Cannot convert {file_path}: {e}")
                failed += 1
                continue

            converted += result.converted_count
            if args.dry_run and result.changed:
                sys.stdout.write(result.output)

    logger.info(f"Processed {files} file(s): {converted} component(s) converted, {failed} failed")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
