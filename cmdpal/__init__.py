"""
cmdpal - fuzzy command palette for music production hosts
"""

__version__ = "0.1.0"
