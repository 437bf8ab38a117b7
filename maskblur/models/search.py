"""
Region search: exhaustive template matching inside a region of interest
"""

import cv2
import numpy as np
import logging
from typing import Optional, Sequence, Tuple

from maskblur.models.geometry import Rect, resolve_roi
from maskblur.utils.errors import EmptyRoiWarning, report

logger = logging.getLogger(__name__)

Offset = Tuple[int, int]


def match_template(haystack: np.ndarray, needle: np.ndarray) -> Offset:
    """
    Find the top-left offset where ``needle`` aligns best with ``haystack``

    Uses a sum-of-squared-differences surface normalized to [0, 1]; the
    minimum is the best alignment.

    Args:
        haystack: Image to search in
        needle: Template to search for

    Returns:
        ``(x, y)`` offset relative to ``haystack``

    Raises:
        EmptyRoiWarning: If the needle is larger than the haystack
    """
    h, w = haystack.shape[:2]
    nh, nw = needle.shape[:2]
    if nh > h or nw > w or nh == 0 or nw == 0:
        raise EmptyRoiWarning(
            f"mask {nw}x{nh} does not fit in search window {w}x{h}")

    surface = cv2.matchTemplate(haystack, needle, cv2.TM_SQDIFF)
    surface = cv2.normalize(surface, None, 0, 1, cv2.NORM_MINMAX)
    min_val, _, min_loc, _ = cv2.minMaxLoc(surface)
    logger.debug(f"Match surface {surface.shape[1]}x{surface.shape[0]}, "
                 f"min {min_val:.4f} at {min_loc}")
    return int(min_loc[0]), int(min_loc[1])


def search(haystack: np.ndarray, roi: Rect,
           needle: np.ndarray) -> Optional[Tuple[Offset, Rect]]:
    """
    Search for ``needle`` inside the ``roi`` window of ``haystack``

    Args:
        haystack: Full image
        roi: User ROI (negative-offset semantics apply)
        needle: Template

    Returns:
        ``(offset, window)`` where ``offset`` is relative to the clamped
        ``window``, or None when the window is empty or too small
    """
    window = resolve_roi(roi, haystack.shape)
    if window.is_empty:
        report(EmptyRoiWarning(f"ROI {roi} is out of bounds, skipping"), logger)
        return None

    logger.debug(f"Using ROI {window}")
    rows, cols = window.slices()
    try:
        offset = match_template(haystack[rows, cols], needle)
    except EmptyRoiWarning as w:
        report(w, logger)
        return None
    return offset, window


def to_image_rect(offset: Offset, window: Rect, haystack_shape: Sequence[int],
                  needle_shape: Sequence[int]) -> Rect:
    """
    Translate a match offset back into full-image coordinates

    The match surface origin is the ROI window; per axis the absolute
    position is ``offset + (haystack_dimension - roi_dimension)``.
    """
    x = offset[0] + (int(haystack_shape[1]) - window.width)
    y = offset[1] + (int(haystack_shape[0]) - window.height)
    return Rect(x, y, int(needle_shape[1]), int(needle_shape[0]))
