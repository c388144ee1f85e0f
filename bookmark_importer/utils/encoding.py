"""
Decoding of raw export bytes into text.
"""

import logging

import chardet

logger = logging.getLogger(__name__)

# Minimum chardet confidence before a detected encoding is trusted
MIN_CONFIDENCE = 0.7
SAMPLE_SIZE = 65536


def decode_content(data: bytes) -> str:
    """
    Decode exported bytes as text.

    UTF-8 (with or without BOM) is tried first since every modern browser
    exports it. Otherwise the encoding is detected with chardet; when
    detection is not confident the bytes are decoded as UTF-8 with invalid
    sequences replaced.

    Args:
        data: Raw file contents

    Returns:
        Decoded text
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    result = chardet.detect(data[:SAMPLE_SIZE])
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0.0

    logger.debug(f"Detected encoding: {encoding} (confidence: {confidence:.2f})")

    if encoding and confidence >= MIN_CONFIDENCE:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning(f"Decoding as {encoding} failed: {e}")
    else:
        logger.warning(f"Low encoding confidence ({confidence:.2f}), using utf-8")

    return data.decode("utf-8", errors="replace")
