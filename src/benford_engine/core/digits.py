"""Extracción del primer dígito de observaciones.

Leading-digit extraction from observations.

Two observation forms are accepted:

- text records (``str``), whose first character is the digit;
- RGBA pixels (4-tuples of 8-bit channels), whose digit comes from the
  product of the clamped channels taken as an unsigned 32-bit integer.

An invalid observation is reported as ``None``, never as an exception.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np

UINT32_MASK = 0xFFFFFFFF
VALID_RECORD_DIGITS = "123456789"


def first_digit(value: int) -> Optional[int]:
    """Primer dígito decimal de un entero positivo.

    Español: Divide entre 10 hasta quedar con un solo dígito.
    English: Divides by 10 until a single digit remains.
    """
    if value <= 0:
        return None
    while value >= 10:
        value //= 10
    return value


def _clamp(channel: int) -> int:
    return channel if channel > 0 else 1


def pixel_value(red: int, green: int, blue: int, alpha: int) -> int:
    """Producto de canales RGBA (ceros reemplazados por 1) módulo 2**32.

    English: Product of RGBA channels (zeros replaced by 1) modulo 2**32.
    """
    product = _clamp(red) * _clamp(green) * _clamp(blue) * _clamp(alpha)
    return product & UINT32_MASK


def _record_digit(record: str) -> Optional[int]:
    if not record or record[0] not in VALID_RECORD_DIGITS:
        return None
    return int(record[0])


def extract(observation: Any) -> Optional[int]:
    """Extrae el primer dígito (1-9) de una observación.

    Español: Acepta registros de texto o tuplas de pixel RGBA. Retorna
    ``None`` cuando el registro no empieza con un dígito de 1 a 9.

    English: Accepts text records or RGBA pixel tuples. Returns ``None`` when
    the record does not start with a digit from 1 to 9. Pixel observations
    always yield a digit because every clamped channel is at least 1.

    Raises:
        TypeError: If the observation is neither a record nor a 4-channel pixel.
    """
    if isinstance(observation, str):
        return _record_digit(observation)
    if isinstance(observation, (tuple, list, np.ndarray)) and len(observation) == 4:
        red, green, blue, alpha = observation
        return first_digit(pixel_value(int(red), int(green), int(blue), int(alpha)))
    raise TypeError(f"Unsupported observation type: {type(observation).__name__}")


def leading_digits(pixels: np.ndarray | Sequence[Sequence[int]]) -> np.ndarray:
    """Primer dígito vectorizado para un arreglo ``(N, 4)`` de pixeles.

    Español: Misma semántica que ``extract`` (clamp a 1 y desborde uint32).
    English: Same semantics as ``extract`` (clamp to 1 and uint32 wraparound).
    """
    array = np.asarray(pixels, dtype=np.uint64)
    if array.size == 0:
        array = array.reshape(0, 4)
    if array.ndim != 2 or array.shape[1] != 4:
        raise ValueError(f"Expected an (N, 4) pixel array, got shape {array.shape}")
    clamped = np.maximum(array, 1)
    values = np.prod(clamped, axis=1, dtype=np.uint64) & np.uint64(UINT32_MASK)
    # At most ten divisions for a 32-bit value.
    while np.any(values >= 10):
        values = np.where(values >= 10, values // 10, values)
    return values.astype(np.int64)
