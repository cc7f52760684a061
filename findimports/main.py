# findimports/main.py
"""Main entry point for the findimports CLI application."""

from findimports.cli.interface import main_cli


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli(prog_name="findimports")

if __name__ == '__main__':
    entrypoint()
