"""
Garden Plan: bed placement and succession planting scheduler
"""

__version__ = "1.0.0"
