"""
Desktop entry point for the card board.

Usage: python main.py [ENV_FILE]
"""
import sys
from pathlib import Path

from desktop_ui.app import main

if __name__ == "__main__":
    env_file = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    sys.exit(main(env_file))
