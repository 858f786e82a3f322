"""Corpus loading and tokenization."""
