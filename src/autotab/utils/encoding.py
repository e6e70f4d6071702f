#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/utils/encoding.py
"""Character encoding detection and handling utilities.

This module provides chardet-based guessing plus the strict-decoding checks
used to match a byte sample against a list of candidate encodings. Samples
are bounded prefixes of a file, so a multi-byte sequence cut at the end of
the sample is never treated as a decoding failure.
"""

from __future__ import annotations

import codecs
import logging

import chardet

from autotab.constants import ENCODING_DISPLAY_NAMES

logger = logging.getLogger(__name__)


def detect_encoding(
    data: bytes,
    sample_size: int = 8192,
    confidence_threshold: float = 0.7,
) -> str | None:
    """Detect character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name (e.g., 'utf-8', 'Windows-1252'), or None if
        detection fails or confidence is below threshold

    Examples
    --------
    >>> data = b"Hello, world!"
    >>> encoding = detect_encoding(data)
    >>> if encoding:
    ...     text = data.decode(encoding)

    """
    sample = data[:sample_size] if len(data) > sample_size else data
    if not sample:
        return None

    result = chardet.detect(sample)

    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0

    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")

    if confidence >= confidence_threshold:
        return encoding

    logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
    return None


def canonical_codec_name(encoding: str) -> str:
    """Return the normalized codec name for ``encoding``.

    Raises
    ------
    LookupError
        If Python does not know the encoding

    Examples
    --------
    >>> canonical_codec_name("Windows-1252")
    'cp1252'

    """
    return codecs.lookup(encoding).name


def display_encoding_name(encoding: str) -> str:
    """Return the human-readable name used in reader descriptions.

    Unknown codecs are returned unchanged.

    Examples
    --------
    >>> display_encoding_name("cp1252")
    'Windows-1252'

    """
    try:
        return ENCODING_DISPLAY_NAMES.get(canonical_codec_name(encoding), encoding)
    except LookupError:
        return encoding


def decodes_strictly(data: bytes, encoding: str) -> bool:
    """Check whether ``data`` is valid in ``encoding``.

    An incomplete multi-byte sequence at the very end of ``data`` is accepted,
    since samples are cut at arbitrary byte boundaries.

    Parameters
    ----------
    data : bytes
        Sample to check
    encoding : str
        Candidate encoding

    Returns
    -------
    bool
        True if every complete sequence decodes without error

    """
    try:
        decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        decoder.decode(data, final=False)
    except UnicodeDecodeError:
        return False
    except LookupError:
        logger.debug(f"Unknown encoding {encoding}")
        return False
    return True


def decode_sample(data: bytes, encoding: str) -> str:
    """Decode a bounded sample, dropping a trailing incomplete sequence.

    Undecodable bytes are replaced rather than raised, since the sample is only
    inspected for structure.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    return decoder.decode(data, final=False)
