"""PiTime: decimal digits of pi from a spigot algorithm.

Quick Start:
    >>> from pitime import generate
    >>> generate(10)
    '3.1415926535'

    >>> from pitime import stream_digits
    >>> list(stream_digits(5))
    [1, 4, 1, 5, 9]

Functions:
    generate: "3." followed by exactly n digits
    stream_digits: Fractional digits yielded as they are confirmed
    normalize: One carry-propagation pass over a state vector
    reference_pi: The same digits from mpmath, for checking
    verify: Compare generate() output with reference_pi()
"""

from .digits import (
    NinesBuffer,
    compute_digits,
    extract_digit,
    generate,
    iter_committed,
    new_state,
    normalize,
    state_length,
    stream_digits,
)
from .reference import Mismatch, first_mismatch, reference_pi, verify

__all__ = [
    # Generation
    "generate",
    "compute_digits",
    "stream_digits",
    "iter_committed",
    # Internals
    "NinesBuffer",
    "extract_digit",
    "new_state",
    "normalize",
    "state_length",
    # Reference
    "Mismatch",
    "first_mismatch",
    "reference_pi",
    "verify",
]
