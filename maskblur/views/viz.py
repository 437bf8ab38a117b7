"""
Debug visualization of the accepted match
"""

import cv2
import numpy as np
from typing import Optional

from maskblur.models.geometry import Rect


def draw_match(img: np.ndarray, rect: Rect, blur_rect: Optional[Rect] = None,
               label: Optional[str] = None) -> np.ndarray:
    """
    Draw the matched rectangle (and the blurred area) on a copy of ``img``

    Args:
        img: BGR or grayscale image
        rect: Matched rectangle
        blur_rect: Expanded region that was blurred
        label: Optional caption drawn above the match

    Returns:
        Annotated BGR image
    """
    vis = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR) if img.ndim == 2 else img.copy()

    if blur_rect is not None and blur_rect != rect:
        cv2.rectangle(vis, (blur_rect.x, blur_rect.y),
                      (blur_rect.x + blur_rect.width - 1, blur_rect.y + blur_rect.height - 1),
                      (0, 200, 200), 1)

    cv2.rectangle(vis, (rect.x, rect.y),
                  (rect.x + rect.width - 1, rect.y + rect.height - 1),
                  (0, 0, 255), 2)

    if label:
        cv2.putText(vis, label, (rect.x, max(rect.y - 5, 12)),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.4, (0, 0, 255), 1, cv2.LINE_AA)
    return vis
