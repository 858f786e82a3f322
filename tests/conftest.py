"""Shared fixtures for the markovquote tests."""

import pytest
import torch

from markovquote.models.markov import MarkovConfig


QUOTES = """\
The only thing we have to fear is fear itself.
- Franklin D. Roosevelt

Stay hungry, stay foolish.
- Steve Jobs

The only way to do great work is to love what you do.
- Steve Jobs

Be the change that you wish to see in the world!
- Mahatma Gandhi

What we think, we become?
"""


@pytest.fixture
def quote_lines():
    return QUOTES.splitlines()


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / 'quotes.txt'
    path.write_text(QUOTES, encoding='utf-8')
    return path


@pytest.fixture
def rng():
    return torch.Generator().manual_seed(1234)


@pytest.fixture
def small_config():
    return MarkovConfig(bucket_count=7)
