#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/detection/format.py
"""Byte-level format detection: BOM, encoding and line ending.

Detection works on bounded prefixes of the file. The functions operating on
bytes are pure; :func:`detect_format` reads the prefixes from a
:class:`~autotab.bytefile.ByteFile` without moving its cursor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from autotab.bytefile import ByteFile
from autotab.constants import (
    BOM,
    BOM_DETECTION_ORDER,
    BOM_PROBE_SIZE,
    DEFAULT_CHARDET_CONFIDENCE_THRESHOLD,
    DEFAULT_ENCODING_CANDIDATES,
    LINE_ENDING_DETECTION_ORDER,
    LineEnding,
)
from autotab.exceptions import FormatDetectionError
from autotab.options.base import DetectionOptions
from autotab.utils.encoding import canonical_codec_name, decode_sample, decodes_strictly, detect_encoding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileFormat:
    """Result of byte-level detection.

    Parameters
    ----------
    bom : BOM
        Detected byte order mark
    encoding : str
        Encoding display name (e.g. ``ASCII``, ``UTF-16LE``)
    line_ending : LineEnding
        Detected line ending convention
    size : int
        File size in bytes

    """

    bom: BOM
    encoding: str
    line_ending: LineEnding
    size: int

    @property
    def start_offset(self) -> int:
        """Offset where data starts, just past the BOM."""
        return self.bom.start_offset

    @property
    def code_unit(self) -> int:
        """Width in bytes of the smallest code unit of the encoding."""
        return 2 if canonical_codec_name(self.encoding).startswith("utf-16") else 1

    @property
    def decoding(self) -> str:
        """Codec used to decode lines.

        Detection only sees a bounded sample, so an ``ASCII`` file is decoded
        as UTF-8, its superset, for text that appears later in the file.
        """
        if canonical_codec_name(self.encoding) == "ascii":
            return "utf-8"
        return self.encoding

    @property
    def line_ending_bytes(self) -> bytes:
        """The line ending encoded in the file's encoding."""
        return self.line_ending.encoded(self.encoding)


def detect_bom(prefix: bytes) -> BOM:
    """Match the first bytes of a file against the known BOM patterns.

    Candidates are tried in :data:`~autotab.constants.BOM_DETECTION_ORDER`;
    the first whose full prefix matches wins.

    Examples
    --------
    >>> detect_bom(b"\\xef\\xbb\\xbfa")
    <BOM.UTF8: 'UTF-8'>
    >>> detect_bom(b"abc")
    <BOM.NONE: 'None'>

    """
    for bom in BOM_DETECTION_ORDER:
        if prefix.startswith(bom.prefix):
            return bom
    return BOM.NONE


def guess_encoding(
    sample: bytes,
    candidates: tuple[str, ...] = DEFAULT_ENCODING_CANDIDATES,
    confidence_threshold: float = DEFAULT_CHARDET_CONFIDENCE_THRESHOLD,
) -> str:
    """Pick the encoding of a BOM-less sample from a fixed candidate list.

    ASCII and UTF-8 candidates are accepted on strict decoding, in candidate
    order. For the remaining (single-byte) candidates, a confident chardet
    guess that names one of them wins; otherwise the first candidate that
    strictly decodes the sample is used.

    Parameters
    ----------
    sample : bytes
        Bounded prefix of the data
    candidates : tuple[str, ...]
        Encodings allowed as a result, in priority order
    confidence_threshold : float
        Minimum chardet confidence

    Returns
    -------
    str
        The matching candidate, as spelled in ``candidates``

    Raises
    ------
    FormatDetectionError
        If no candidate matches

    """
    unicode_like = {"ascii", "utf-8"}
    remaining: list[str] = []

    for candidate in candidates:
        if canonical_codec_name(candidate) in unicode_like:
            if decodes_strictly(sample, candidate):
                logger.debug(f"Sample decodes strictly as {candidate}")
                return candidate
        else:
            remaining.append(candidate)

    guessed = detect_encoding(sample, sample_size=len(sample), confidence_threshold=confidence_threshold)
    if guessed:
        try:
            guessed_codec = canonical_codec_name(guessed)
        except LookupError:
            guessed_codec = ""
        for candidate in remaining:
            if canonical_codec_name(candidate) == guessed_codec and decodes_strictly(sample, candidate):
                logger.debug(f"chardet guess {guessed} matches candidate {candidate}")
                return candidate

    for candidate in remaining:
        if decodes_strictly(sample, candidate):
            logger.debug(f"Falling back to first decoding candidate {candidate}")
            return candidate

    raise FormatDetectionError(f"Cannot detect encoding, tried: {', '.join(candidates)}")


def detect_line_ending(sample: bytes, encoding: str) -> LineEnding:
    """Find the line ending used in a sample.

    The decoded sample is searched for CRLF, then LF, then CR; the first
    sequence present wins.

    Raises
    ------
    FormatDetectionError
        If the sample contains no line ending

    """
    text = decode_sample(sample, encoding)
    for ending in LINE_ENDING_DETECTION_ORDER:
        if ending.value in text:
            return ending

    raise FormatDetectionError("Cannot detect line ending")


def detect_format(byte_file: ByteFile, options: DetectionOptions | None = None) -> FileFormat:
    """Detect BOM, encoding and line ending of an open file.

    The file cursor is left where it was.

    Parameters
    ----------
    byte_file : ByteFile
        Open file to inspect
    options : DetectionOptions, optional
        Sampling and candidate settings

    Returns
    -------
    FileFormat
        Detected format

    Raises
    ------
    FormatDetectionError
        If the file is empty or its encoding or line ending cannot be determined

    """
    options = options or DetectionOptions()
    size = byte_file.size

    if size == 0:
        raise FormatDetectionError(f"Empty file: {byte_file.path}")

    with byte_file.checkpoint():
        byte_file.seek(0)
        bom = detect_bom(byte_file.read(min(BOM_PROBE_SIZE, size)))

        start = bom.start_offset
        sample = b""
        if size > start:
            byte_file.seek(start)
            sample = byte_file.read(min(options.sample_size, size - start))

    if bom.encoding:
        encoding = bom.encoding
    else:
        encoding = guess_encoding(sample, options.encoding_candidates, options.chardet_confidence_threshold)

    line_ending = detect_line_ending(sample, encoding)

    logger.debug(f"Detected BOM={bom}, encoding={encoding}, line ending={line_ending} for {byte_file.path}")
    return FileFormat(bom=bom, encoding=encoding, line_ending=line_ending, size=size)
