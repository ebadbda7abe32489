"""
Entry point for `python -m spindle`.

The same `main()` is exposed as the `spindle` console script in pyproject.toml.
"""

from .main import main

if __name__ == "__main__":
    main()
