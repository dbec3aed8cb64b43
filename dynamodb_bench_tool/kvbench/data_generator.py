"""
Value payload generation for benchmark writes.
"""

import random
import string
from typing import Protocol

from .constants import DEFAULT_VALUE_SIZE

_ALPHABET = string.ascii_letters + string.digits


class DataGenerator(Protocol):
    """Source of value payloads written alongside each key."""

    def get_random_value(self) -> str: ...


class RandomValueGenerator:
    """Generates random alphanumeric values of a fixed size."""

    def __init__(self, value_size: int = DEFAULT_VALUE_SIZE, seed: int | None = None):
        if value_size <= 0:
            raise ValueError("value_size must be positive")
        self.value_size = value_size
        self._random = random.Random(seed)

    def get_random_value(self) -> str:
        return "".join(self._random.choices(_ALPHABET, k=self.value_size))
