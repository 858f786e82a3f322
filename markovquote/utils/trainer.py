"""Utilities for training and generation."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import torch

from markovquote.data.corpus import WhitespaceTokenizer, read_corpus
from markovquote.models.context import Context
from markovquote.models.markov import MarkovConfig, MarkovModel


logger = logging.getLogger(__name__)

SKIP_MARKER = '-'
END_MARKS = ('.', '!', '?')


class Trainer:
    """Training helper for MarkovModel instances."""

    def __init__(
        self,
        model: MarkovModel,
        tokenizer: Optional[WhitespaceTokenizer] = None,
    ):
        """
        Args:
            model: The model to fill
            tokenizer: Tokenizer for corpus lines
        """
        self.model = model
        self.tokenizer = tokenizer or WhitespaceTokenizer()
        self.reset_counts()

    def reset_counts(self) -> None:
        """Zero the per-pass line, reset, skip and token tallies."""
        self.lines = 0
        self.resets = 0
        self.skipped = 0
        self.tokens = 0

    def step(self, context: Context, line: str) -> Context:
        """Train on one line and return the advanced rolling context.

        A blank line clears the context. A line whose first word starts
        with ``-`` is ignored and leaves the context as it was.
        """
        self.lines += 1
        words = self.tokenizer.tokenize(line)
        if not words:
            self.resets += 1
            return context.reset()
        if words[0].startswith(SKIP_MARKER):
            self.skipped += 1
            logger.debug(f"Skipping line {self.lines}: {line!r}")
            return context
        for word in words:
            self.model.add(context, word)
            context.push(word)
        self.tokens += len(words)
        return context

    def train(self, lines: Iterable[str]) -> MarkovModel:
        """Consume every line of a corpus."""
        self.reset_counts()
        context = self.model.new_context()
        for line in lines:
            context = self.step(context, line)

        stats = self.model.stats()
        logger.info(
            f"Trained on {self.lines} lines ({self.tokens} tokens, "
            f"{self.skipped} skipped, {self.resets} blank)"
        )
        logger.info(
            f"Model holds {stats['entries']} contexts in "
            f"{stats['used_buckets']}/{stats['buckets']} buckets "
            f"(longest chain {stats['longest_chain']})"
        )
        return self.model


class Generator:
    """Quote generation helper for MarkovModel instances."""

    def __init__(
        self,
        model: MarkovModel,
        max_quote_length: Optional[int] = None,
        generator: Optional[torch.Generator] = None,
        tokenizer: Optional[WhitespaceTokenizer] = None,
    ):
        """
        Args:
            model: Trained model
            max_quote_length: Step bound; the model config's if omitted
            generator: Random source; torch's default generator if omitted
            tokenizer: Used to join the sampled words
        """
        self.model = model
        if max_quote_length is None:
            max_quote_length = model.config.max_quote_length
        self.max_quote_length = max_quote_length
        self.generator = generator
        self.tokenizer = tokenizer or WhitespaceTokenizer()

    def generate_words(self) -> List[str]:
        """Sample words until a miss, an end mark or the step bound."""
        context = self.model.new_context()
        words: List[str] = []
        counter = 0
        while counter <= self.max_quote_length:
            word = self.model.next_word(context, self.generator)
            if word is None:
                break
            context.push(word)
            words.append(word)
            if any(mark in word for mark in END_MARKS):
                break
            counter += 1
        return words

    def generate(self) -> str:
        """Generate one quote; empty if the model knows no start."""
        return self.tokenizer.decode(self.generate_words())

    def generate_many(self, count: int) -> List[str]:
        return [self.generate() for _ in range(count)]


def build_model(
    lines: Iterable[str],
    config: Optional[MarkovConfig] = None,
) -> MarkovModel:
    """Train a new model on a sequence of corpus lines."""
    return Trainer(MarkovModel(config)).train(lines)


def load_model(
    path: Union[str, Path],
    config: Optional[MarkovConfig] = None,
) -> MarkovModel:
    """Train a new model on a corpus file.

    Raises:
        CorpusError: If the file cannot be read; no model is returned
    """
    config = config or MarkovConfig()
    logger.info(f"Loading corpus from {path}")
    return build_model(read_corpus(path, config.max_line_length), config)


def generate_quote(
    model: MarkovModel,
    max_quote_length: Optional[int] = None,
    generator: Optional[torch.Generator] = None,
) -> str:
    """Generate one quote from a trained model."""
    return Generator(model, max_quote_length, generator).generate()


def generate_quotes(
    model: MarkovModel,
    count: int,
    max_quote_length: Optional[int] = None,
    generator: Optional[torch.Generator] = None,
) -> List[str]:
    """Generate ``count`` independent quotes."""
    return Generator(model, max_quote_length, generator).generate_many(count)
