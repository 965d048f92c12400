"""
Main entry point for the Epitech-Style-Checker package.

This allows the package to be run as a module:
python -m epitech_style_checker
"""

from .cli.commands import main

if __name__ == '__main__':
    main()
