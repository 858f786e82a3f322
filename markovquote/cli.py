"""Command-line interface for training and quote generation."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import torch

from markovquote.data.corpus import CorpusError
from markovquote.models.markov import MarkovConfig
from markovquote.utils.trainer import Generator, load_model


logger = logging.getLogger(__name__)


def setup_logging(level=logging.INFO):
    """Configure logging."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def seed_random(seed: Optional[int] = None) -> int:
    """Seed torch's default generator once for the whole process."""
    if seed is None:
        seed = torch.seed()
    else:
        torch.manual_seed(seed)
    logger.info(f"Random seed: {seed}")
    return seed


def write_quotes(quotes: List[str], path: Path) -> None:
    """Write one quote per line."""
    with open(path, 'w', encoding='utf-8', errors='surrogateescape') as f:
        for quote in quotes:
            f.write(quote + '\n')
    logger.info(f"Wrote {len(quotes)} quotes to {path}")


def printable(text: str) -> str:
    """Show corpus bytes that were not UTF-8 as replacement characters."""
    return text.encode('utf-8', 'surrogateescape').decode('utf-8', 'replace')


def make_config(args) -> MarkovConfig:
    return MarkovConfig(
        context_size=args.context_size,
        max_quote_length=getattr(args, 'max_length', MarkovConfig.max_quote_length),
        bucket_count=args.buckets,
    )


def generate(args, config: MarkovConfig) -> None:
    """Train, then generate quotes."""
    model = load_model(args.data, config)
    generator = Generator(model)
    quotes = generator.generate_many(args.count)
    if not any(quotes):
        logger.warning("Model produced no words; is the corpus empty?")

    if args.output is not None:
        write_quotes(quotes, args.output)
        return
    for quote in quotes:
        print(f"\n{printable(quote)}\n")


def inspect(args, config: MarkovConfig) -> None:
    """Train, then print the model contents."""
    model = load_model(args.data, config)
    print(printable(model.dump()))
    for key, value in model.stats().items():
        print(f"{key}: {value}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Train a word-level Markov chain and generate quotes'
    )
    parser.add_argument(
        '--data',
        type=Path,
        default=Path('quotes.txt'),
        help='Training corpus file'
    )
    parser.add_argument(
        '--seed',
        type=int,
        help='Seed for the random source (random if omitted)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log per-line training details'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    # Model arguments shared by every command
    model_parser = argparse.ArgumentParser(add_help=False)
    model_parser.add_argument('--context-size', type=int, default=3)
    model_parser.add_argument('--buckets', type=int, default=420)

    # Generation arguments
    generate_parser = subparsers.add_parser('generate', parents=[model_parser])
    generate_parser.add_argument('--count', type=int, default=1)
    generate_parser.add_argument('--max-length', type=int, default=50)
    generate_parser.add_argument('--output', type=Path)

    # Inspection arguments
    subparsers.add_parser('inspect', parents=[model_parser])

    args = parser.parse_args(argv)
    try:
        config = make_config(args)
    except ValueError as e:
        parser.error(str(e))
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    seed_random(args.seed)

    try:
        if args.command == 'generate':
            generate(args, config)
        else:
            inspect(args, config)
    except CorpusError as e:
        logger.error(f"No model available: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
