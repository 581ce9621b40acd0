"""Module entrypoint for ``python -m treecopy``.

All argument parsing and task execution happen in ``treecopy.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
