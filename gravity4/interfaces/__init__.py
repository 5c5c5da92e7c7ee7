"""
gravity4.interfaces - User interfaces for gravity-flip Connect Four
"""

# Don't import anything here to avoid circular imports
__all__ = []
