"""CLI entry point for reading test result reports."""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from results_reader.processor import FileResults, ResultsProcessor
from results_reader.readers.loading import load_reader_manifest

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "unknown": "❔",
}


def log_results_summary(
    log: logging.Logger, file_results: Sequence[FileResults]
) -> None:
    """Log a formatted summary of read results per file."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for file_result in file_results:
        log.info("%s: %d result(s)", file_result.path, len(file_result.results))
        if file_result.error:
            log.info("  Error: %s", file_result.error)
        for test_result in file_result.results:
            symbol = STATUS_SYMBOLS.get(test_result.status, "?")
            if test_result.duration is not None:
                log.info(
                    "  %s %s: %s (%ds)",
                    symbol,
                    test_result.name,
                    test_result.status,
                    test_result.duration,
                )
            else:
                log.info("  %s %s: %s", symbol, test_result.name, test_result.status)
            if test_result.message:
                log.info("    Message: %s", test_result.message)


def expand_paths(paths: Sequence[Path]) -> Sequence[Path]:
    """Expand directories into the files they contain, recursively."""
    expanded: list[Path] = []
    for path in paths:
        if path.is_dir():
            expanded.extend(sorted(p for p in path.rglob("*") if p.is_file()))
        else:
            expanded.append(path)
    return expanded


async def run(
    reader_key: str,
    reader_config_json: str,
    paths: Sequence[Path],
) -> int:
    """Read report files and return exit code."""
    log = logging.getLogger("results_reader")

    log.info("Loading reader: %s", reader_key)
    manifest = load_reader_manifest(reader_key)

    config_dict = json.loads(reader_config_json)
    config = manifest.config_cls(**config_dict)
    reader = manifest.reader_factory(config)

    files = expand_paths(paths)
    if not files:
        log.info("No files to read")
        print(json.dumps(format_output([])))
        return 0

    processor = ResultsProcessor(reader=reader)
    file_results = await processor.read_files(files)

    log_results_summary(log, file_results)

    output = format_output(file_results)
    print(json.dumps(output, indent=2))

    has_failures = any(
        file_result.error is not None
        or any(result.status == "failed" for result in file_result.results)
        for file_result in file_results
    )

    return 1 if has_failures else 0


def format_output(file_results: Sequence[FileResults]) -> dict[str, Any]:
    """Format file results for JSON output."""
    all_results: list[dict[str, Any]] = []
    for file_result in file_results:
        for test_result in file_result.results:
            all_results.append(
                {
                    "file": str(file_result.path),
                    "name": test_result.name,
                    "status": test_result.status,
                    "start": test_result.start,
                    "stop": test_result.stop,
                    "duration": test_result.duration,
                    "message": test_result.message,
                    "trace": test_result.trace,
                    "description": test_result.description,
                    "parameters": dict(test_result.parameters),
                    "labels": [
                        dataclasses.asdict(label) for label in test_result.labels
                    ],
                }
            )

    return {
        "total": len(all_results),
        "passed": sum(1 for r in all_results if r["status"] == "passed"),
        "failed": sum(1 for r in all_results if r["status"] == "failed"),
        "unknown": sum(1 for r in all_results if r["status"] == "unknown"),
        "errors": sum(1 for f in file_results if f.error is not None),
        "results": all_results,
    }


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Read test result reports into normalized results"
    )
    parser.add_argument(
        "--reader",
        default="trx",
        help="Reader key (trx)",
    )
    parser.add_argument(
        "--reader-config",
        default="{}",
        help="JSON configuration for the reader",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        help="Report files or directories to read",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            reader_key=args.reader,
            reader_config_json=args.reader_config,
            paths=args.paths,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
