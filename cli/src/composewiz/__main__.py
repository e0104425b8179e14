"""Allow ``python -m composewiz``."""

from composewiz.cli import main

if __name__ == "__main__":
    main()
