"""
Main entry point for the descaudit package.

This allows the package to be run as a module:
python -m descaudit
"""

from .cli.commands import main

if __name__ == '__main__':
    main()
