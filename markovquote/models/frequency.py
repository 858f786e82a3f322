"""Per-context word counts and weighted sampling."""

from typing import Dict, ItemsView, Iterator, Optional

import torch


class FrequencyTable:
    """Counts of the words observed after one context.

    Every stored count is at least 1 and iteration follows insertion
    order, which keeps draws reproducible under a seeded generator.
    """

    def __init__(self, word: Optional[str] = None):
        """
        Args:
            word: Optional first word, stored with count 1
        """
        self.counts: Dict[str, int] = {}
        if word is not None:
            self.add_word(word)

    def add_word(self, word: str) -> None:
        """Increment ``word`` or insert it with count 1."""
        self.counts[word] = self.counts.get(word, 0) + 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def random_draw(self, generator: Optional[torch.Generator] = None) -> str:
        """Pick a word with probability proportional to its count.

        Draws ``r`` uniformly from ``[0, total)`` and walks the entries,
        subtracting each count until ``r`` lands inside one.

        Args:
            generator: Random source; torch's default generator if omitted
        """
        total = self.total
        assert total > 0, "random_draw called on an empty table"
        r = int(torch.randint(total, (1,), generator=generator).item())
        for word, count in self.counts.items():
            if r < count:
                return word
            r -= count
        raise AssertionError("draw fell outside the table")

    def merge(self, other: 'FrequencyTable') -> None:
        """Add the counts of ``other`` into this table."""
        for word, count in other.counts.items():
            self.counts[word] = self.counts.get(word, 0) + count

    def items(self) -> ItemsView[str, int]:
        return self.counts.items()

    def __getitem__(self, word: str) -> int:
        return self.counts[word]

    def __contains__(self, word: object) -> bool:
        return word in self.counts

    def __iter__(self) -> Iterator[str]:
        return iter(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def __repr__(self) -> str:
        pairs = ', '.join(f"{{{w}: {c}}}" for w, c in self.counts.items())
        return f"[ {pairs} ]"
