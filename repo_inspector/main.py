# repo_inspector/main.py
"""Main entry point for the repo-inspector CLI application."""

from repo_inspector.cli.interface import main_cli_group


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli_group(prog_name="repo-inspector")

if __name__ == '__main__':
    entrypoint()
