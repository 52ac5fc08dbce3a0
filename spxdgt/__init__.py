"""Hash-based signature primitives: SHA-2 states and MGF1, Haraka, bitsliced AES, and randomness."""

__version__ = "0.1.0"