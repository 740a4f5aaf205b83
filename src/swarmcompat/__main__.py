"""
Main entry point for the swarmcompat CLI

This allows running the CLI with: python -m swarmcompat
"""
from .cli import main

if __name__ == "__main__":
    main()
