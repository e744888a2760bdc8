"""
Package entry point.

Allows running the application via:

    python -m lichhoc

This simply forwards execution to lichhoc.cli.main().
"""

from lichhoc.cli import main

if __name__ == "__main__":
    main()
