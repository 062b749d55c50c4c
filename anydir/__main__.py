"""Module entrypoint for ``python -m anydir``."""

from .cli import main


if __name__ == "__main__":
    main()
