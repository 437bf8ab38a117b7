"""
Preprocessing: grayscale conversion, inversion and noise suppression
"""

import cv2
import numpy as np
import logging
from dataclasses import dataclass
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

# Value assigned to pixels above the threshold
THRESHOLD_COLOR = 255

NORMAL = "normal"
INVERTED = "inverted"


@dataclass(frozen=True)
class PreparedInput:
    """Derived versions of the main input image"""

    gray: np.ndarray
    inverted: np.ndarray
    gray_binary: np.ndarray
    inverted_binary: np.ndarray

    def search_image(self, variant: str) -> np.ndarray:
        """Thresholded image used for template matching"""
        return self.gray_binary if variant == NORMAL else self.inverted_binary

    def score_image(self, variant: str) -> np.ndarray:
        """Un-thresholded image used for similarity scoring"""
        return self.gray if variant == NORMAL else self.inverted

    @property
    def shape(self) -> Tuple[int, int]:
        return self.gray.shape[:2]


@dataclass(frozen=True)
class MaskImage:
    """A decoded mask in both orientations"""

    name: str
    gray: np.ndarray
    inverted: np.ndarray

    def variant(self, variant: str) -> np.ndarray:
        return self.gray if variant == NORMAL else self.inverted

    @property
    def shape(self) -> Tuple[int, int]:
        return self.gray.shape[:2]


def to_gray(img: np.ndarray) -> np.ndarray:
    """
    Convert an image to single-channel intensity

    Args:
        img: BGR, BGRA or grayscale image

    Returns:
        New grayscale uint8 image
    """
    if img.ndim == 2:
        return img.copy()
    if img.shape[2] == 1:
        return img[:, :, 0].copy()
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def invert(gray: np.ndarray) -> np.ndarray:
    """Bitwise intensity inversion (255 - value for 8-bit images)"""
    return cv2.bitwise_not(gray)


def binarize(gray: np.ndarray, threshold: float,
             max_value: int = THRESHOLD_COLOR) -> np.ndarray:
    """Binary threshold: pixels above ``threshold`` become ``max_value``"""
    _, binary = cv2.threshold(gray, threshold, max_value, cv2.THRESH_BINARY)
    return binary


def prepare_input(img: np.ndarray, threshold: float) -> PreparedInput:
    """
    Build every derived version of the main input image

    Args:
        img: Input image (BGR or grayscale)
        threshold: Noise suppression cutoff

    Returns:
        PreparedInput with grayscale, inverted and their thresholded forms
    """
    gray = to_gray(img)
    inverted = invert(gray)

    prepared = PreparedInput(
        gray=gray,
        inverted=inverted,
        gray_binary=binarize(gray, threshold),
        inverted_binary=binarize(inverted, threshold),
    )
    logger.debug(f"Prepared input {gray.shape[1]}x{gray.shape[0]} "
                 f"with threshold {threshold}")
    return prepared


def prepare_mask(name: str, img: np.ndarray) -> MaskImage:
    """Grayscale and inverted forms of a mask; masks are never thresholded"""
    gray = to_gray(img)
    return MaskImage(name=name, gray=gray, inverted=invert(gray))


def describe(prepared: PreparedInput) -> Dict[str, float]:
    """Fraction of 'on' pixels in each thresholded variant"""
    return {
        NORMAL: float(np.count_nonzero(prepared.gray_binary)) / prepared.gray.size,
        INVERTED: float(np.count_nonzero(prepared.inverted_binary)) / prepared.gray.size,
    }
