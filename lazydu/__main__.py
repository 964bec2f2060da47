"""Module entrypoint for ``python -m lazydu``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and scanning happen in ``lazydu.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
