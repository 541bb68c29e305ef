"""Entrypoint for `python -m msgpick`."""

from .cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
