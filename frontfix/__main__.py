"""Allow ``python -m frontfix``."""

from frontfix.cli import main

if __name__ == "__main__":
    main()
