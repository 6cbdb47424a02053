"""Allow ``python -m caribic``."""

from caribic.cli import main

if __name__ == "__main__":
    main()
