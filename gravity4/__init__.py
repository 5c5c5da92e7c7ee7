"""
gravity4 - Connect Four with periodic gravity inversion

This package provides the board engine, the turn state machine, a search
contract with an alpha-beta bot built on it, and a command-line interface.
"""

# Version number
__version__ = '0.1.0'
