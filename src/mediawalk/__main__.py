"""Allow ``python -m mediawalk``."""

from mediawalk.cli.commands import main

if __name__ == "__main__":
    main()
