"""
Package entry point.

Allows running the application via:

    python -m classroll

This simply forwards execution to classroll.cli.main().
"""

from classroll.cli import main

if __name__ == "__main__":
    main()
