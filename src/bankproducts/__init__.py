"""
Bank Products Backend
"""

__version__ = "1.0.0"
