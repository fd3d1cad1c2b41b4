"""Motor de análisis de primer dígito (Ley de Benford).

Leading-digit (Benford's Law) analysis engine.
"""

__version__ = "0.1.0"
