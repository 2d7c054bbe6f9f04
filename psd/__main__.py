"""Package entry point for ``python -m psd``."""

from psd.cli import main

if __name__ == "__main__":
    main()
