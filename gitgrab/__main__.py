#!/usr/bin/env python3
"""
Main entry point for the git-grab package when run as a module.
"""

from .cli import main

if __name__ == "__main__":
    main()
