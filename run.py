#!/usr/bin/env python3
"""
Game of Squares Launcher
=========================
Run this script to start the game.
"""

from game_of_squares.main import main

if __name__ == "__main__":
    main()
