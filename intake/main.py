import argparse
import json
import sys
from pathlib import Path

from intake.config.settings import Settings
from intake.logging.logger import Log
from intake.processor.exceptions import ProcessorError, ThreatDetectedError
from intake.processor.file_loader import FileLoader
from intake.processor.processor import build_processor
from intake.processor.result_serializer import ResultSerializer

EXIT_REJECTED = 2
EXIT_RETRYABLE = 3


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="intake",
        description="Scan, extract and classify an invoice document.",
    )
    parser.add_argument("path", type=Path, help="PDF, JPEG or PNG file to ingest")
    parser.add_argument(
        "--media-type",
        default=None,
        help="Declared media type (guessed from the file suffix when omitted)",
    )
    return parser.parse_args(argv)


def _error_payload(exc: ProcessorError) -> dict[str, object]:
    error: dict[str, object] = {
        "stage": exc.stage,
        "message": exc.public_message,
        "retryable": exc.retryable,
    }
    if isinstance(exc, ThreatDetectedError):
        error["threats"] = exc.threats
        error["advisory"] = exc.advisory
    return {"error": error}


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build pipeline -> process one file -> print JSON."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)

    document = FileLoader().load(args.path, media_type=args.media_type)
    processor = build_processor(settings)
    try:
        result = processor.process(document)
    except ProcessorError as exc:
        json.dump(_error_payload(exc), sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
        return EXIT_RETRYABLE if exc.retryable else EXIT_REJECTED

    json.dump(ResultSerializer().serialize(result), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
