"""Word-level Markov chain keyed by fixed-length contexts."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import torch

from markovquote.models.context import Context
from markovquote.models.frequency import FrequencyTable


logger = logging.getLogger(__name__)


@dataclass
class MarkovConfig:
    """Configuration for the Markov chain."""
    context_size: int = 3
    max_quote_length: int = 50
    bucket_count: int = 420
    # a 1024 byte line buffer less its terminator
    max_line_length: Optional[int] = 1023

    def __post_init__(self):
        if self.context_size < 1:
            raise ValueError(f"context_size must be at least 1, got {self.context_size}")
        if self.bucket_count < 1:
            raise ValueError(f"bucket_count must be at least 1, got {self.bucket_count}")
        if self.max_quote_length < 0:
            raise ValueError(f"max_quote_length must not be negative, got {self.max_quote_length}")
        if self.max_line_length is not None and self.max_line_length < 1:
            raise ValueError(f"max_line_length must be positive, got {self.max_line_length}")


class Entry:
    """A stored context together with the words seen after it."""

    __slots__ = ('context', 'table')

    def __init__(self, context: Context, word: Optional[str] = None):
        # private copy so the caller's live context can keep moving
        self.context = context.copy()
        self.table = FrequencyTable(word)

    def __repr__(self) -> str:
        return f"Entry({self.context.format()}, {self.table!r})"


class MarkovModel:
    """Fixed-size hash table of chained entries.

    Each bucket is a list of entries whose contexts hash to it. Lookups
    scan the bucket and compare contexts for equality, so two entries in
    one bucket never share a context.
    """

    def __init__(self, config: Optional[MarkovConfig] = None):
        self.config = config or MarkovConfig()
        self.buckets: List[List[Entry]] = [[] for _ in range(self.config.bucket_count)]

    @property
    def context_size(self) -> int:
        return self.config.context_size

    def new_context(self) -> Context:
        """Return an empty context sized for this model."""
        return Context(size=self.config.context_size)

    def _bucket(self, context: Context) -> List[Entry]:
        return self.buckets[hash(context) % len(self.buckets)]

    def _find(self, context: Context) -> Optional[Entry]:
        for entry in self._bucket(context):
            if entry.context == context:
                return entry
        return None

    def add(self, context: Context, word: str) -> None:
        """Record that ``word`` followed ``context``."""
        entry = self._find(context)
        if entry is not None:
            entry.table.add_word(word)
            return
        self._bucket(context).append(Entry(context, word))

    def lookup(self, context: Context) -> Optional[FrequencyTable]:
        entry = self._find(context)
        return entry.table if entry is not None else None

    def next_word(
        self,
        context: Context,
        generator: Optional[torch.Generator] = None,
    ) -> Optional[str]:
        """Sample a word that may follow ``context``.

        Returns None if the context was never observed during training.
        """
        entry = self._find(context)
        if entry is None:
            return None
        return entry.table.random_draw(generator)

    def merge(self, other: 'MarkovModel') -> None:
        """Sum the counts of ``other`` into this model."""
        if other.context_size != self.context_size:
            raise ValueError(
                f"Cannot merge models with context sizes "
                f"{self.context_size} and {other.context_size}"
            )
        for entry in other:
            mine = self._find(entry.context)
            if mine is None:
                mine = Entry(entry.context)
                self._bucket(entry.context).append(mine)
            mine.table.merge(entry.table)
        logger.debug(f"Merged {len(other)} entries, model now holds {len(self)}")

    def stats(self) -> Dict[str, int]:
        """Entry count and bucket occupancy."""
        chains = [len(bucket) for bucket in self.buckets]
        return {
            'entries': sum(chains),
            'buckets': len(chains),
            'used_buckets': sum(1 for n in chains if n),
            'longest_chain': max(chains),
            'observations': sum(entry.table.total for entry in self),
        }

    def dump(self) -> str:
        """Render every non-empty bucket for debugging."""
        blocks = []
        for bucket in self.buckets:
            if not bucket:
                continue
            lines = ['[']
            for entry in bucket:
                lines.append(f"Context: {entry.context.format()}")
                lines.append(f"Value: {entry.table!r}")
            lines.append(']')
            blocks.append('\n'.join(lines))
        return '\n\n'.join(blocks)

    def __contains__(self, context: object) -> bool:
        return isinstance(context, Context) and self._find(context) is not None

    def __iter__(self) -> Iterator[Entry]:
        for bucket in self.buckets:
            yield from bucket

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self.buckets)
