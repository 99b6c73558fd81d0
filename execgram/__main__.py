"""Entry point for `python -m execgram`."""

from execgram.cli.commands import app

if __name__ == "__main__":
    app()
