"""Entry point for ``python -m clockwatch``."""

from clockwatch.cli import main

if __name__ == "__main__":
    main()
