"""CLI for execgram."""
