#!/usr/bin/env python3
"""
pokebattle - 3v3 turn-based battle simulator

Thin wrapper around the CLI. Battle logic lives in the pokebattle package:
- battle/mechanics.py: damage & status resolver
- battle/session.py: turn sequencing
- ui/: rich renderables for the terminal

To run: python main.py [--seed N] [--level N]
"""

from pokebattle.cli import run

if __name__ == "__main__":
    run()
