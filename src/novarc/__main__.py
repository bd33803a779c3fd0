"""Allow ``python -m novarc``."""

from novarc.cli import main

if __name__ == "__main__":
    main()
