"""Corpus loading and tokenization utilities."""

import logging
import re
from pathlib import Path
from typing import Iterator, List, Optional, Union


logger = logging.getLogger(__name__)

# undecodable bytes round-trip through the model unchanged
_ERRORS = 'surrogateescape'


class CorpusError(OSError):
    """Raised when the training corpus cannot be opened or read."""


class WhitespaceTokenizer:
    """Splits lines on spaces, tabs, newlines and carriage returns.

    Punctuation stays attached to its word, so "end." is a single token
    and can carry the generator's stop condition.
    """

    _token = re.compile(r'[^ \t\n\r]+')

    def tokenize(self, text: str) -> List[str]:
        """Convert a line to its words; empty for blank lines."""
        return self._token.findall(text)

    def decode(self, words: List[str]) -> str:
        """Join words back into text."""
        return ' '.join(words)


def read_corpus(
    path: Union[str, Path],
    max_line_length: Optional[int] = None,
) -> Iterator[str]:
    """Yield the lines of a corpus file.

    Only a newline ends a line; a carriage return stays in the line for
    the tokenizer to split on. Bytes that are not valid UTF-8 are kept as surrogate
    escapes rather than rejected.

    Args:
        path: Text file to read
        max_line_length: Lines longer than this many UTF-8 bytes are cut
            at that byte; None keeps them whole

    Raises:
        CorpusError: If the file cannot be opened or read
    """
    path = Path(path)
    try:
        f = open(path, 'r', encoding='utf-8', errors=_ERRORS, newline='\n')
    except OSError as e:
        raise CorpusError(f"Unable to open corpus {path}: {e}") from e

    with f:
        try:
            for lineno, line in enumerate(f, start=1):
                line = line.rstrip('\n')
                raw = line.encode('utf-8', _ERRORS)
                if max_line_length is not None and len(raw) > max_line_length:
                    logger.warning(
                        f"{path}:{lineno}: line of {len(raw)} bytes "
                        f"truncated to {max_line_length}"
                    )
                    line = raw[:max_line_length].decode('utf-8', _ERRORS)
                yield line
        except OSError as e:
            raise CorpusError(f"Unable to read corpus {path}: {e}") from e
