"""Word-level Markov chain quote generator."""
