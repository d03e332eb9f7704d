# src/core/vector_codec.py
"""Float32 vector <-> bytes codec for persisted embeddings.

Layout: flat little-endian IEEE-754 float32, 4 bytes per element, no header.
A 1024-dim embedding is exactly 4096 bytes.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from creditai.core.errors import MalformedVectorError

FLOAT32_LE = np.dtype("<f4")
BYTES_PER_ELEMENT = FLOAT32_LE.itemsize


def encode_vector(vector: Sequence[float] | np.ndarray) -> bytes:
    """Encode a vector as little-endian float32 bytes.

    Non-finite values (NaN, +/-Inf) are written unchanged.

    Args:
        vector: Ordered sequence of numbers (cast to float32).

    Returns:
        Byte buffer of length 4 * len(vector).
    """
    arr = np.asarray(vector, dtype=FLOAT32_LE)
    if arr.ndim != 1:
        raise ValueError(f"Expected 1D vector, got {arr.ndim}D")
    return arr.tobytes()


def decode_vector(data: bytes) -> np.ndarray:
    """Decode little-endian float32 bytes into a 1D float32 array.

    Raises:
        MalformedVectorError: If len(data) is not a multiple of 4.
    """
    if len(data) % BYTES_PER_ELEMENT != 0:
        raise MalformedVectorError(
            f"Encoded vector length {len(data)} is not a multiple of "
            f"{BYTES_PER_ELEMENT} bytes"
        )
    return np.frombuffer(data, dtype=FLOAT32_LE).astype(np.float32)
