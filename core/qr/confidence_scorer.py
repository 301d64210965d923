"""
Confidence Scorer Module.

Heuristic confidence for a successful decode, built from three additive
terms and capped at 1.0:

- Area:       symbol quadrilateral area / image area
- Quality:    Laplacian variance of the decoded image
- Regularity: how close the four sides are to equal length

The score is not a probability from the decoder itself.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from core.enhancer.quality_scorer import QualityScorer


class ConfidenceScorer:
    """
    Scores a located QR symbol in [0.0, 1.0].

    Pure and deterministic: the same box and image always give the same score.
    """

    # (lower, upper, weight), checked in order, first match wins
    AREA_BANDS = ((0.1, 0.8, 0.4), (0.05, 0.9, 0.2))
    # (threshold, weight), score must exceed threshold
    QUALITY_STEPS = ((100.0, 0.3), (50.0, 0.15))
    # (threshold, weight), deviation must be below threshold
    REGULARITY_STEPS = ((0.1, 0.3), (0.2, 0.15))

    def __init__(
        self,
        qualityScorer: Optional[QualityScorer] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize ConfidenceScorer.

        Args:
            qualityScorer: Sharpness metric provider.
            logger: Logger instance for debug output.
        """
        self._qualityScorer = qualityScorer or QualityScorer()
        self._logger = logger or logging.getLogger(__name__)

    def score(
        self,
        boundingBox: Sequence[Tuple[float, float]],
        image: np.ndarray
    ) -> float:
        """
        Compute confidence for a decoded symbol.

        Args:
            boundingBox: Four corner points of the symbol.
            image: Image variant the symbol was decoded from.

        Returns:
            Confidence in [0.0, 1.0]; 0.0 without a 4-point box.
        """
        if boundingBox is None or len(boundingBox) != 4:
            return 0.0

        if image is None or image.size == 0:
            return 0.0

        areaTerm = self._areaTerm(boundingBox, image)
        qualityTerm = self._qualityTerm(image)
        regularityTerm = self._regularityTerm(boundingBox)

        confidence = min(areaTerm + qualityTerm + regularityTerm, 1.0)

        self._logger.debug(
            f"Confidence: area={areaTerm:.2f}, quality={qualityTerm:.2f}, "
            f"regularity={regularityTerm:.2f}, total={confidence:.2f}"
        )
        return confidence

    def _areaTerm(
        self,
        boundingBox: Sequence[Tuple[float, float]],
        image: np.ndarray
    ) -> float:
        contour = np.asarray(boundingBox, dtype=np.float32).reshape(-1, 1, 2)
        symbolArea = cv2.contourArea(contour)
        h, w = image.shape[:2]
        ratio = symbolArea / float(h * w)

        for lower, upper, weight in self.AREA_BANDS:
            if lower < ratio < upper:
                return weight
        return 0.0

    def _qualityTerm(self, image: np.ndarray) -> float:
        quality = self._qualityScorer.score(image)

        for threshold, weight in self.QUALITY_STEPS:
            if quality > threshold:
                return weight
        return 0.0

    def _regularityTerm(self, boundingBox: Sequence[Tuple[float, float]]) -> float:
        sides = sideLengths(boundingBox)
        avgSide = sum(sides) / 4.0
        if avgSide <= 0:
            # Degenerate box, every corner on the same spot
            return 0.0

        deviation = sum(abs(side - avgSide) for side in sides) / avgSide

        for threshold, weight in self.REGULARITY_STEPS:
            if deviation < threshold:
                return weight
        return 0.0


def sideLengths(boundingBox: Sequence[Tuple[float, float]]) -> List[float]:
    """Lengths of consecutive sides of a closed polygon."""
    count = len(boundingBox)
    return [
        math.dist(boundingBox[i], boundingBox[(i + 1) % count])
        for i in range(count)
    ]
