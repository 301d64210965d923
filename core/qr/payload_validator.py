"""
QR Payload Validation.

A decoded payload is accepted when it is non-empty and contains only
printable characters (code point >= 32) or the line endings LF/CR.
"""

LINE_ENDINGS = frozenset((10, 13))


def isValidPayload(data: str) -> bool:
    """
    Check a decoded QR string for stray control characters.

    Args:
        data: Decoded text.

    Returns:
        bool: True if the payload can be reported as-is.
    """
    if not data:
        return False

    for char in data:
        code = ord(char)
        if code < 32 and code not in LINE_ENDINGS:
            return False

    return True
