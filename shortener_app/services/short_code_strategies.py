"""
Short code generation strategies for the redirect service.
Uses Strategy Pattern so allocation logic can be tested with fixed codes.
"""

import base64
import secrets
import string
from abc import ABC, abstractmethod


# Alphabet of URL-safe base64
URL_SAFE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Draw one candidate short code.

        Uniqueness is not the strategy's job: the caller checks the
        store and redraws on collision.
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Fixed-length code from a cryptographically random byte source.

    Random bytes are encoded with URL-safe base64 and truncated, so every
    code is ``length`` characters from URL_SAFE_ALPHABET.
    64^6 ≈ 68.7 billion codes at the default length.
    """

    def __init__(self, length: int = 6):
        if length < 1:
            raise ValueError("Short code length must be positive")
        self.length = length

    def generate(self) -> str:
        # n bytes encode to ceil(4n/3) >= n characters, no padding needed
        raw = secrets.token_bytes(self.length)
        return base64.urlsafe_b64encode(raw).decode("ascii")[: self.length]
