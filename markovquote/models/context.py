"""Sliding window of the most recent words, the state of the chain."""

from typing import Iterable, Iterator, List, Optional


_HASH_SEED = 5381
_HASH_MASK = (1 << 64) - 1


class Context:
    """Fixed-length window over the last ``size`` words.

    Empty slots hold ``None``. Words enter at the last slot and the
    oldest word falls off the front, so a fresh context after one push
    reads ``[None, None, word]``.
    """

    __slots__ = ('size', 'words')

    def __init__(self, words: Optional[Iterable[str]] = None, size: int = 3):
        """
        Args:
            words: Optional words to push, in order
            size: Number of slots in the window
        """
        if size < 1:
            raise ValueError(f"Context size must be at least 1, got {size}")
        self.size = size
        self.words: List[Optional[str]] = [None] * size
        for word in words or ():
            self.push(word)

    def push(self, word: str) -> 'Context':
        """Evict the oldest slot and store ``word`` in the last one."""
        self.words[:-1] = self.words[1:]
        self.words[-1] = word
        return self

    def reset(self) -> 'Context':
        """Clear every slot."""
        self.words = [None] * self.size
        return self

    def copy(self) -> 'Context':
        new = Context(size=self.size)
        new.words = list(self.words)
        return new

    def is_empty(self) -> bool:
        return all(word is None for word in self.words)

    def digest(self) -> int:
        """djb2 over the slots, wrapped to 64 bits.

        An empty slot only advances the multiplier, so it is not
        guaranteed to hash apart from a short word. Equality decides.
        """
        h = _HASH_SEED
        for word in self.words:
            if word is None:
                h = (h * 33) & _HASH_MASK
                continue
            for c in word.encode('utf-8', 'surrogateescape'):
                h = (h * 33 + c) & _HASH_MASK
        return h

    def __hash__(self) -> int:
        return self.digest()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        # None == None holds and None never equals a str
        return self.size == other.size and self.words == other.words

    def __iter__(self) -> Iterator[Optional[str]]:
        return iter(self.words)

    def __len__(self) -> int:
        return self.size

    def format(self) -> str:
        return '[' + ', '.join(str(w) for w in self.words) + ']'

    def __repr__(self) -> str:
        return f"Context({self.format()})"
