"""Main entry point for scriptflow CLI when run as a module."""

from scriptflow.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
