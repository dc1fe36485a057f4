"""
Main entry point for the macos-use CLI.

This module is executed when running `python -m macos_use` or via the `macos-use` executable.
"""

from .cli import app


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
