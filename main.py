"""
ASCE Wind Speed Extractor: CLI Entry Point

Usage:
  # Look up one address
  python main.py run --address "411 Crusaders Drive, Sanford, NC 27330"

  # Read {address, debugScreenshots} from a JSON file instead
  python main.py run --input input.json

  # Read the INPUT record from the key-value store (actor-style)
  python main.py run

  # Print the last stored OUTPUT record
  python main.py show
"""

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("windextractor")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="ASCE Wind Speed Extractor: look up the design wind speed for an address"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Extract the wind speed for one address")
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument("--address", type=str, help="Address to look up")
    source.add_argument("--input", type=str, help="Path to a JSON input record")
    run_parser.add_argument(
        "--no-debug-screenshots",
        dest="debug_screenshots",
        action="store_false",
        default=None,
        help="Skip per-step diagnostic screenshots",
    )

    subparsers.add_parser("show", help="Print the stored OUTPUT record")

    return parser.parse_args(argv)


async def load_input(args, store):
    from windextractor.domain.entities.extraction_input import ExtractionInput
    from windextractor.domain.interfaces.i_result_store import INPUT_KEY

    if args.address is not None:
        data = {"address": args.address}
    elif args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        data = await store.get_value(INPUT_KEY)

    if args.debug_screenshots is not None:
        data = dict(data or {}, debugScreenshots=args.debug_screenshots)
    return ExtractionInput.from_mapping(data)


async def run_extraction(args) -> int:
    from windextractor.infrastructure.config import Config
    from windextractor.infrastructure.container import Container
    from windextractor.use_cases.run_extraction import RunExtractionRequest

    config = Config.from_env()
    container = Container(config)

    extraction_input = await load_input(args, container.store)
    logger.info("Starting ASCE Wind Speed Extractor...")
    response = await container.run_extraction_use_case.execute(
        RunExtractionRequest(extraction_input=extraction_input)
    )

    print("\n" + "=" * 70)
    print("RESULT")
    print("=" * 70)
    print(json.dumps(response.result.to_dict(), indent=2))
    print("=" * 70)
    return 0


async def show_output() -> int:
    from windextractor.domain.interfaces.i_result_store import OUTPUT_KEY
    from windextractor.infrastructure.config import Config
    from windextractor.infrastructure.container import Container

    container = Container(Config.from_env())
    record = await container.store.get_value(OUTPUT_KEY)
    if record is None:
        print("No OUTPUT record stored yet.")
        return 1
    print(json.dumps(record, indent=2))
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )

    from windextractor.domain.exceptions import WindExtractorError

    try:
        if args.command == "run":
            return asyncio.run(run_extraction(args))
        if args.command == "show":
            return asyncio.run(show_output())
    except WindExtractorError as e:
        logger.error(f"Fatal: {e}")
        return 2
    return 1


if __name__ == "__main__":
    sys.exit(main())
