"""Entry point for the flakeid command line driver."""

import argparse
import logging
import sys

from flakeid.config import Settings, from_settings, load_settings


def setup_logging(settings: Settings) -> logging.Logger:
    """Attach handlers to the package logger."""
    logger = logging.getLogger("flakeid")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(settings.logging.level.upper())
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(formatter)
    logger.addHandler(sh)

    if settings.logging.file:
        fh = logging.FileHandler(settings.logging.file)
        fh.setFormatter(formatter)
        logger.addHandler(fh)
    return logger


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flakeid", description="Generate Snowflake IDs.")
    parser.add_argument("-n", "--count", type=non_negative_int, default=1, help="number of IDs to print")
    parser.add_argument("--describe", action="store_true", help="print the generator state")
    parser.add_argument(
        "--decompose", type=int, nargs="+", metavar="ID", help="print the fields of each ID as JSON"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the flakeid driver."""
    args = build_parser().parse_args(argv)
    settings = load_settings()
    logger = setup_logging(settings)

    generator = from_settings(settings)
    logger.info("Generator ready: %s", generator.describe())

    if args.decompose:
        for snowflake in args.decompose:
            print(generator.decompose(snowflake).model_dump_json())
        return

    for _ in range(args.count):
        print(generator.next_id())

    if args.describe:
        print(generator.describe())


if __name__ == "__main__":
    main()
