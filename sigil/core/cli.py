"""Command-line entry points."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sigil.core.config import settings
from sigil.core.logging_setup import configure_logging
from sigil.core.signature_index import InvalidSignature, SignatureIndex
from sigil.repositories.signature_repository import JsonSignatureRepository
from sigil.repositories.signature_repository_interface import SignatureSourceError
from sigil.schemas.verification import FileStatus, VerificationReport
from sigil.services.verification_service import VerificationService

logger = logging.getLogger(__name__)

EXIT_BAD_SIGNATURES = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sigil",
        description="Check that files are what their extension claims, "
        "using the magic numbers at the start of each file.",
    )
    parser.add_argument("--version", "-V", action="version",
                        version=f"%(prog)s {settings.APP_VERSION}")
    parser.add_argument("path", type=Path, help="File or directory to verify")
    parser.add_argument("-i", "--input-json-file", dest="input_json_file", type=Path,
                        default=None,
                        help="JSON file with file signatures (default: bundled database)")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Descend into subdirectories")
    parser.add_argument("--log-level", dest="log_level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        type=str.upper, default=None,
                        help="Logging level (default: INFO, DEBUG with SIGIL_DEBUG)")
    return parser


def print_report(report: VerificationReport, use_emojis: bool | None = None) -> None:
    if use_emojis is None:
        use_emojis = sys.stdout.isatty()

    def mark(emoji: str) -> str:
        return f"{emoji} " if use_emojis else ""

    print("\n--- Verification Complete ---")
    print(f"Total files scanned: {report.total}")
    print(f"{mark('✅')}Correct: {report.correct}")
    print(f"{mark('❌')}Incorrect: {report.incorrect}")
    print(f"{mark('❔')}Unknown: {report.unknown}")
    print(f"{mark('⚠️')}Errors: {report.errors}")

    incorrect = report.with_status(FileStatus.INCORRECT)
    if incorrect:
        print("\n--- Incorrect Files ---")
        for r in incorrect:
            print(f"{mark('❌')}{r.path}: Declared as '{r.declared_type}', "
                  f"but is '{r.detected_type}'")

    unknown = report.with_status(FileStatus.UNKNOWN)
    if unknown:
        print("\n--- Unknown Files ---")
        for r in unknown:
            print(f"{mark('❔')}{r.path}: Declared as '{r.declared_type}', "
                  "no known signature matched")

    errors = report.with_status(FileStatus.ERROR)
    if errors:
        print("\n--- Error Files ---")
        for r in errors:
            print(f"{mark('⚠️')}{r.path}: Error processing file - {r.error_message}")


def verify(argv: list[str] | None = None) -> int:
    """Run a verification from command-line arguments and return the exit code."""
    args = build_parser().parse_args(argv)
    if args.log_level:
        configure_logging(level=args.log_level)
    else:
        configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

    signatures_file = args.input_json_file or settings.SIGNATURES_FILE
    repository = JsonSignatureRepository(signatures_file)
    try:
        index = SignatureIndex.build(
            repository.get_all(),
            max_span=settings.MAX_SIGNATURE_SPAN,
            source=repository.source,
        )
    except (SignatureSourceError, InvalidSignature) as e:
        logger.error("Unusable signature database: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_SIGNATURES

    print(f"Signatures loaded from '{repository.source}'.")
    print(f"Max buffer size: {index.required_header_length} bytes.")
    print("\nStarting verification...")

    service = VerificationService(index, max_workers=settings.MAX_WORKERS)
    report = asyncio.run(service.verify_path(args.path, recursive=args.recursive))
    print_report(report)
    return report.exit_code


def main() -> None:
    sys.exit(verify())


def serve() -> None:
    """Start the HTTP API."""
    from sigil.main import start

    start()
