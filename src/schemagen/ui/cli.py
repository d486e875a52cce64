from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from schemagen.app import generate_all, generate_single, list_base_paths, list_resources
from schemagen.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate and catalog resource schemas")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate-all", help="Generate schemas for every base path of the specs repo"
    )
    generate.add_argument(
        "--local-path",
        type=Path,
        help="The local path to the azure-rest-api-specs repo (cloned when omitted)",
    )
    generate.add_argument(
        "--batch-count",
        type=int,
        help="If running in batch mode, the total number of batch jobs running",
    )
    generate.add_argument(
        "--batch-index",
        type=int,
        help="If running in batch mode, the index of this batch job",
    )
    generate.add_argument(
        "--readme-files",
        nargs="+",
        help="The list of readme.md files to generate schemas for",
    )
    generate.add_argument(
        "--output-path",
        type=Path,
        help="Path of the JSON report listing the processed packages",
    )
    generate.add_argument(
        "--summary-log-path",
        type=Path,
        help="The path to store generation summary information (markdown)",
    )

    single = subparsers.add_parser("generate-single", help="Generate schemas for one base path")
    single.add_argument(
        "--base-path",
        required=True,
        help='The swagger base path in the specs repo (e.g. "compute/resource-manager")',
    )
    single.add_argument(
        "--local-path",
        type=Path,
        help="The local path to the azure-rest-api-specs repo (cloned when omitted)",
    )

    resources = subparsers.add_parser(
        "list-resources", help="List resource types and API versions of the published schemas"
    )
    resources.add_argument(
        "--remote",
        action="store_true",
        help="Fetch schemas over HTTPS instead of reading the local schemas directory",
    )

    basepaths = subparsers.add_parser(
        "list-basepaths", help="List the base paths of the specs repo"
    )
    basepaths.add_argument(
        "--local-path",
        type=Path,
        help="The local path to the azure-rest-api-specs repo (cloned when omitted)",
    )

    return parser.parse_args(list(argv))


def _validate_batch_args(args: argparse.Namespace) -> None:
    if (args.batch_index is None) != (args.batch_count is None):
        raise ValueError("--batch-index and --batch-count must be passed together")
    if args.batch_count is not None and args.batch_count < 1:
        raise ValueError("--batch-count must be positive")
    if args.batch_index is not None and not 0 <= args.batch_index < args.batch_count:
        raise ValueError("--batch-index must be between 0 and --batch-count - 1")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "generate-all":
            _validate_batch_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    if parsed_args.command == "generate-all":
        generate_all(
            local_path=parsed_args.local_path,
            batch_index=parsed_args.batch_index,
            batch_count=parsed_args.batch_count,
            readme_files=parsed_args.readme_files,
            output_path=parsed_args.output_path,
            summary_log_path=parsed_args.summary_log_path,
        )
        return

    try:
        if parsed_args.command == "generate-single":
            configs = generate_single(
                base_path=parsed_args.base_path,
                local_path=parsed_args.local_path,
            )
            log.info("Generated %s schema files", len(configs))
        elif parsed_args.command == "list-resources":
            catalog = list_resources(remote=parsed_args.remote)
            print(json.dumps(catalog.as_dict(), indent=2))  # noqa: T201
        elif parsed_args.command == "list-basepaths":
            for base_path in list_base_paths(local_path=parsed_args.local_path):
                print(base_path)  # noqa: T201
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
