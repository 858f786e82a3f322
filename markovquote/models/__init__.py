"""Markov chain data structures."""
