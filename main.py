#!/usr/bin/env python3
"""
Main CLI interface for the Dockerfile Generator.

Usage: python main.py --lang LANGUAGE [--version VER] [--port PORT] [--dockerignore]
"""

from dockerfile_generator.cli import main


if __name__ == "__main__":
    main()
