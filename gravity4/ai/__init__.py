"""
gravity4/ai/__init__.py - Move search for gravity-flip Connect Four
"""

from gravity4.ai.search import Bot, SearchableGame

__all__ = ['Bot', 'SearchableGame']
