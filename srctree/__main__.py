"""Module entrypoint for ``python -m srctree``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing happens in ``srctree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
