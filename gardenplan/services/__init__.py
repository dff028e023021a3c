"""
Transactional services for Garden Plan
"""

from .succession import create_succession_planting, load_placement

__all__ = [
    'create_succession_planting',
    'load_placement'
]
