"""
Quality Scorer Module

Estimates image sharpness as the variance of the Laplacian response.
Sharp, high-frequency content (crisp QR modules) produces a large variance;
blurred or flat images produce a small one.

Follows SRP: Only handles quality measurement.
"""

import logging
import numpy as np
import cv2


logger = logging.getLogger(__name__)


def toGrayscale(image: np.ndarray) -> np.ndarray:
    """
    Reduce an image to a single luminance channel.

    BGR (H, W, 3) and BGRA (H, W, 4) are converted by luminance; any other
    channel count keeps channel 0.
    """
    if image.ndim == 2:
        return image

    channels = image.shape[2]
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return np.ascontiguousarray(image[:, :, 0])


class QualityScorer:
    """
    Sharpness metric based on the Laplacian (second derivative) filter.

    The score has no upper bound. Typical thresholds used by the
    confidence scorer are 50 (acceptable) and 100 (sharp).
    """

    def score(self, image: np.ndarray) -> float:
        """
        Compute the quality score of an image.

        Args:
            image: Input image (BGR or grayscale).

        Returns:
            Variance of the Laplacian response, 0.0 for empty input.
        """
        if image is None or image.size == 0:
            return 0.0

        gray = toGrayscale(image)
        laplacian = cv2.Laplacian(gray, cv2.CV_64F)
        variance = float(laplacian.var())

        logger.debug(f"Quality score: {variance:.2f}")
        return variance
