"""
Main entry point for the resume_parser package.

Usage:
    python -m resume_parser [command] [options]

See 'python -m resume_parser --help' for available commands.
"""

from resume_parser.cli import main

if __name__ == "__main__":
    main()
