"""
Models package containing the matching, scoring and blurring algorithms
"""

from .geometry import Rect, resolve_roi
from .preprocess import prepare_input, prepare_mask, PreparedInput, MaskImage
from .search import match_template, search, to_image_rect
from .similarity import mssim, score
from .selector import Candidate, ORIENTATIONS, find_best, select_best, accept
from .blur import BlurMargin, expand_rect, blur_region

__all__ = [
    'Rect', 'resolve_roi',
    'prepare_input', 'prepare_mask', 'PreparedInput', 'MaskImage',
    'match_template', 'search', 'to_image_rect',
    'mssim', 'score',
    'Candidate', 'ORIENTATIONS', 'find_best', 'select_best', 'accept',
    'BlurMargin', 'expand_rect', 'blur_region'
]
