"""
Main entry point for the fritzer package.

Allows running the tool as: python -m fritzer
"""

from fritzer.cli import main

if __name__ == "__main__":
    main()
