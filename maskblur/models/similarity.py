"""
Structural similarity (MSSIM) between a mask and a candidate window
"""

import cv2
import numpy as np
import logging
from typing import Tuple

logger = logging.getLogger(__name__)

# Stabilizing constants for 8-bit data: (0.01 * 255) ** 2, (0.03 * 255) ** 2
C1 = 6.5025
C2 = 58.5225

# Gaussian window, independent of the redaction blur settings
WINDOW_SIZE = (11, 11)
WINDOW_SIGMA = 1.5

MAX_CHANNELS = 3


def mssim(a: np.ndarray, b: np.ndarray) -> Tuple[float, ...]:
    """
    Compute the mean SSIM of two patches, one value per channel

    Args:
        a: First patch
        b: Second patch of the same shape

    Returns:
        Tuple with the mean of the SSIM map for each channel
    """
    if a.shape != b.shape:
        raise ValueError(f"Patch shapes differ: {a.shape} vs {b.shape}")

    i1 = a.astype(np.float32)
    i2 = b.astype(np.float32)

    mu1 = cv2.GaussianBlur(i1, WINDOW_SIZE, WINDOW_SIGMA)
    mu2 = cv2.GaussianBlur(i2, WINDOW_SIZE, WINDOW_SIGMA)

    mu1_sq = mu1 ** 2
    mu2_sq = mu2 ** 2
    mu1_mu2 = mu1 * mu2

    sigma1_sq = cv2.GaussianBlur(i1 * i1, WINDOW_SIZE, WINDOW_SIGMA) - mu1_sq
    sigma2_sq = cv2.GaussianBlur(i2 * i2, WINDOW_SIZE, WINDOW_SIGMA) - mu2_sq
    sigma12 = cv2.GaussianBlur(i1 * i2, WINDOW_SIZE, WINDOW_SIGMA) - mu1_mu2

    numerator = (2 * mu1_mu2 + C1) * (2 * sigma12 + C2)
    denominator = (mu1_sq + mu2_sq + C1) * (sigma1_sq + sigma2_sq + C2)
    ssim_map = numerator / denominator

    if ssim_map.ndim == 2:
        return (float(np.mean(ssim_map)),)
    return tuple(float(v) for v in np.mean(ssim_map, axis=(0, 1)))


def score(a: np.ndarray, b: np.ndarray) -> float:
    """
    Single similarity value: MSSIM averaged over at most 3 channels

    Args:
        a: First patch
        b: Second patch

    Returns:
        Similarity, 1.0 for identical patches
    """
    channels = mssim(a, b)[:MAX_CHANNELS]
    return sum(channels) / len(channels)
