"""Main entry point for screenlex CLI when run as a module."""

from screenlex.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
