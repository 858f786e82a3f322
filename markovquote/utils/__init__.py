"""Training and generation helpers."""
