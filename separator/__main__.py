"""
Module entry point for: python -m separator

Allows running the separator directly as a module:
    python -m separator analyze <image_path> [options]
    python -m separator batch <directory> [options]
    python -m separator visualize <image_path> [options]
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
