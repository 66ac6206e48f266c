"""PixelWords CLI — command-line interface for extraction, serving, and info.

Usage:
    python -m pixelwords extract photo.png --dictionary assets/dict.txt
    python -m pixelwords extract photo.png --seed 7 --json
    python -m pixelwords serve --port 8080
    python -m pixelwords info
"""

from __future__ import annotations

import argparse
import json
import sys

from loguru import logger


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="pixelwords",
        description="PixelWords — find the words hidden in an image",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- extract ----
    extract_parser = subparsers.add_parser("extract", help="Extract words from an image file")
    extract_parser.add_argument("image", type=str, help="Path to image file")
    extract_parser.add_argument("--dictionary", type=str, default=None, help="Word-per-line dictionary file")
    extract_parser.add_argument("--seed", type=int, default=None, help="Random seed for letter assignment")
    extract_parser.add_argument("--max-word-len", type=int, default=None, help="Longest word to search for")
    extract_parser.add_argument("--max-consecutive", type=int, default=None, help="Cap on repeated letters")
    extract_parser.add_argument("--line-width", type=int, default=50, help="Letters per output line")
    extract_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    # ---- serve ----
    serve_parser = subparsers.add_parser("serve", help="Start the FastAPI API server")
    serve_parser.add_argument("--host", type=str, default=None, help="Host")
    serve_parser.add_argument("--port", type=int, default=None, help="Port")
    serve_parser.add_argument("--workers", type=int, default=None, help="Number of workers")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    # ---- info ----
    subparsers.add_parser("info", help="Show system information")

    args = parser.parse_args(argv)

    if args.command == "extract":
        cmd_extract(args)
    elif args.command == "serve":
        cmd_serve(args)
    elif args.command == "info":
        cmd_info()


def cmd_extract(args: argparse.Namespace) -> None:
    """Run the pipeline on one image file."""
    from backend.config import settings
    from backend.logging_config import setup_logging
    from core.errors import InputError, StartupError
    from core.grid.flattener import wrap_letter_string
    from core.matching.dictionary import load_dictionary
    from core.pipeline import PipelineConfig, WordExtractionPipeline
    from core.vision.decoder import ImageDecoder

    setup_logging(settings, log_to_file=False)

    try:
        dictionary = load_dictionary(
            args.dictionary or settings.dictionary_path,
            settings.dictionary_max_length,
        )
    except StartupError as e:
        logger.error(e.message)
        sys.exit(1)

    config = PipelineConfig(
        max_word_len=args.max_word_len if args.max_word_len is not None else settings.max_word_length,
        max_consecutive=(
            args.max_consecutive if args.max_consecutive is not None else settings.max_consecutive_letters
        ),
        max_results=settings.max_results,
        random_seed=args.seed if args.seed is not None else settings.random_seed,
    )

    try:
        pipeline = WordExtractionPipeline(dictionary, config)
        result = pipeline.process(ImageDecoder().read(args.image))
    except (InputError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    if args.json:
        print(json.dumps({"words": result.words, "letter_string": result.letter_string}))
        return

    print(f"\n=== WORDS ({result.width}x{result.height}, {result.inference_time_ms:.1f} ms) ===")
    if result.words:
        for word in result.words:
            print(f"  {word}")
    else:
        print("  (none)")

    print(f"\n=== LETTER STRING ({len(result.letter_string)} letters) ===")
    for line in wrap_letter_string(result.letter_string, args.line_width):
        print(f"  {line}")


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI API server."""
    import uvicorn

    from backend.config import settings

    logger.info("Starting PixelWords API server...")
    uvicorn.run(
        "backend.apps.api.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        workers=args.workers or settings.workers,
        reload=args.reload,
        log_level="info",
    )


def cmd_info() -> None:
    """Show system information."""
    import platform

    import cv2
    import numpy as np

    from backend.config import settings

    try:
        import fastapi
        fastapi_ver = fastapi.__version__
    except ImportError:
        fastapi_ver = "not installed"

    print(f"""
PixelWords — Image to Words
══════════════════════════════════════════════
  Python:         {platform.python_version()}
  Platform:       {platform.system()} {platform.machine()}
  NumPy:          {np.__version__}
  OpenCV:         {cv2.__version__}
  FastAPI:        {fastapi_ver}
  Dictionary:     {settings.dictionary_path}
  Max word len:   {settings.max_word_length}
  Max repeats:    {settings.max_consecutive_letters}
  Random seed:    {settings.random_seed}
""")


if __name__ == "__main__":
    main()
