"""
Run a CHIP-8 program headlessly and print the final frame.

    python main.py                     # built-in demo program
    python main.py game.ch8 --cycles 5000 --keys 5 --screenshot frame.png
"""

import sys

from chip8vm.cli import main

if __name__ == "__main__":
    sys.exit(main())
