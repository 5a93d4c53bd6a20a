"""Module entrypoint for ``python -m umm``.

The picker calls back into this entrypoint to render previews, so module-mode
execution must behave exactly like the console script.
"""

from .cli import main


if __name__ == "__main__":
    main()
