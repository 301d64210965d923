"""
QR Decoder Interface Module.

This module defines the interface and outcome types for QR code decoding.
A decoder is a fallible capability: it either returns the decoded symbol
or a fault describing why the backend could not process the image.

Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Tuple, Union
import numpy as np


@dataclass
class DecodedSymbol:
    """
    Output of one decode attempt that ran to completion.

    Attributes:
        text: Decoded payload, empty when no symbol was found.
        points: Corners of the located symbol [(x, y), ...].
                Four points, or empty when nothing usable was located.
    """
    text: str
    points: List[Tuple[int, int]] = field(default_factory=list)


@dataclass
class DecoderFault:
    """
    Internal failure of the decoder backend (malformed buffer, etc.).

    Attributes:
        description: Human-readable fault description.
    """
    description: str


DecodeOutcome = Union[DecodedSymbol, DecoderFault]


class IQrDecoder(ABC):
    """
    Interface for QR code decoders.

    Implementations locate and decode a single QR symbol. They must not
    raise across this boundary: backend errors are reported as DecoderFault.
    """

    @abstractmethod
    def decode(self, image: np.ndarray) -> DecodeOutcome:
        """
        Decode one QR symbol in an image.

        Args:
            image: Input image (BGR or grayscale numpy array)

        Returns:
            DecodedSymbol (text possibly empty) or DecoderFault
        """
        pass

    @property
    @abstractmethod
    def backendName(self) -> str:
        """Short backend identifier ("opencv", "zxing", ...)."""
        pass


def normalizePoints(rawPoints) -> List[Tuple[int, int]]:
    """
    Convert backend corner output into a list of integer points.

    Accepts arrays shaped (4, 2), (1, 4, 2) or any sequence of pairs.
    Anything that does not yield exactly four corners becomes empty.
    """
    if rawPoints is None:
        return []

    array = np.asarray(rawPoints, dtype=np.float64)
    if array.size == 0:
        return []

    array = array.reshape(-1, 2)
    if len(array) != 4:
        return []

    return [(int(round(x)), int(round(y))) for x, y in array]
