"""Module entrypoint for ``python -m dirpicker``.

All argument parsing and runtime setup happen in ``dirpicker.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
