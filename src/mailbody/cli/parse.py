"""
Command-line interface for message body parsing.

Usage:
    # Single file
    python -m mailbody.cli.parse message.eml

    # Directory batch processing
    python -m mailbody.cli.parse inbox/ --output bodies.jsonl

    # Apply display-time fixes as well
    python -m mailbody.cli.parse message.eml --display
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from mailbody.display import prepare_for_display
from mailbody.logging_config import setup_logging
from mailbody.parsing import parse_body


setup_logging()
logger = structlog.get_logger(__name__)


def process_single_file(eml_path: Path, display: bool = False, verbose: bool = False) -> dict:
    """
    Parse a single .eml file into a renderable body.

    Args:
        eml_path: Path to .eml file
        display: Also apply display-time fixes
        verbose: Enable verbose output

    Returns:
        Record with file, kind and content
    """
    if verbose:
        logger.info("processing_file", path=str(eml_path))

    raw = eml_path.read_bytes().decode("utf-8", errors="replace")

    body = parse_body(raw)
    if display:
        body = prepare_for_display(body)

    return {"file": str(eml_path), "kind": body.kind.value, "content": body.content}


def process_directory(dir_path: Path, display: bool = False, verbose: bool = False) -> List[dict]:
    """
    Parse all .eml files under a directory.

    Args:
        dir_path: Directory path
        display: Also apply display-time fixes
        verbose: Enable verbose output

    Returns:
        List of parsed records, in path order
    """
    eml_files = sorted(dir_path.glob("**/*.eml"))

    if not eml_files:
        logger.warning("no_eml_files_found", directory=str(dir_path))
        return []

    logger.info("processing_directory", files_count=len(eml_files))

    results = []
    errors = []

    for idx, eml_file in enumerate(eml_files, 1):
        try:
            if verbose:
                print(f"[{idx}/{len(eml_files)}] Processing {eml_file.name}...", file=sys.stderr)

            results.append(process_single_file(eml_file, display=display, verbose=verbose))

        except OSError as e:
            logger.error("file_processing_failed", file=str(eml_file), error=str(e))
            errors.append({"file": str(eml_file), "error": str(e)})

    logger.info(
        "directory_processing_completed",
        total=len(eml_files),
        success=len(results),
        errors=len(errors),
    )

    return results


def write_output(results: List[dict], output_path: Optional[Path], format: str = "jsonl") -> None:
    """
    Write results to a file, or stdout when no path is given.

    Args:
        results: Parsed records
        output_path: Output file path
        format: Output format ("json" or "jsonl")
    """
    if not output_path:
        if format == "jsonl":
            for result in results:
                print(json.dumps(result, ensure_ascii=False))
        else:
            print(json.dumps(results, ensure_ascii=False, indent=2))
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        if format == "jsonl":
            for result in results:
                f.write(json.dumps(result, ensure_ascii=False) + "\n")
        else:
            json.dump(results, f, ensure_ascii=False, indent=2)

    logger.info("output_written", path=str(output_path), count=len(results))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Parse raw .eml messages into sanitized, renderable bodies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Single file
  %(prog)s message.eml

  # Process directory, save to file
  %(prog)s inbox/ --output bodies.jsonl

  # Include display-time fixes
  %(prog)s message.eml --display
        """
    )

    parser.add_argument(
        "input",
        type=str,
        help="Path to .eml file or directory containing .eml files"
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout). A .json suffix selects json format"
    )

    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl"],
        default="jsonl",
        help="Output format (default: jsonl)"
    )

    parser.add_argument(
        "--display",
        action="store_true",
        help="Apply display-time rescue and HTML reclassification"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        setup_logging(log_level="DEBUG")

    input_path = Path(args.input)

    if not input_path.exists():
        print(f"Error: Path not found: {input_path}", file=sys.stderr)
        return 1

    try:
        if input_path.is_file():
            results = [process_single_file(input_path, display=args.display, verbose=args.verbose)]
        elif input_path.is_dir():
            results = process_directory(input_path, display=args.display, verbose=args.verbose)
        else:
            print(f"Error: Invalid input path: {input_path}", file=sys.stderr)
            return 1

        output_path = Path(args.output) if args.output else None

        # Auto-detect format from file extension
        format = args.format
        if output_path and format == "jsonl" and output_path.suffix == ".json":
            format = "json"

        write_output(results, output_path, format)

        if args.verbose:
            print(f"\nParsed {len(results)} messages", file=sys.stderr)

    except OSError as e:
        logger.error("cli_failed", error=str(e), exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
