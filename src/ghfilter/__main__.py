"""Entry point for running ghfilter as a module.

Allows running the application with:
    python -m ghfilter

This delegates to the Typer CLI app.
"""

from ghfilter.cli import app

if __name__ == "__main__":
    app()
