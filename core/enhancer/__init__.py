"""
Image Enhancement Module

Contains implementations used by the enhanced retry pass:
- QrImageEnhancer: grayscale, Otsu, CLAHE, closing and upscaling
- QualityScorer: Laplacian-variance sharpness metric
"""

from core.enhancer.quality_scorer import QualityScorer, toGrayscale
from core.enhancer.qr_image_enhancer import QrImageEnhancer


__all__ = [
    "QualityScorer",
    "QrImageEnhancer",
    "toGrayscale"
]
