"""
Views package for output generation
"""

from .writers import save_image
from .viz import draw_match

__all__ = ['save_image', 'draw_match']
