"""Module entrypoint for ``python -m searchpane``.

All argument parsing and runtime setup happen in ``searchpane.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
