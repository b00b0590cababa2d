"""Spigot digit generator for pi.

Digits of pi are produced one at a time from a mixed-radix state vector,
without ever holding a high-precision value of pi. Each outer iteration
multiplies the represented fraction by 10 (the normalization pass), pulls
one candidate digit out of position 0, and feeds it to a nines buffer that
holds back digits which a later carry could still change.

Example:
    >>> from pitime import generate
    >>> generate(10)
    '3.1415926535'
"""

import time
from typing import Iterator

# =============================================================================
# Constants
# =============================================================================

SLACK = 3          # extra state terms beyond floor(10n/3)
EXTRA_ROUNDS = 3   # outer iterations beyond n
LOOKAHEAD = 10     # digits added per retry when a nines run is unresolved
CARRY_OUT = 10     # candidate digit meaning "9 rolled over"

INITIAL_TERM = 2


# =============================================================================
# State
# =============================================================================


def check_slack(slack: int) -> None:
    """Reject slack values that leave the state vector too short.

    Below ``SLACK`` some digit counts come out wrong without any sign of
    failure (a single digit with slack 1 or 2 reads "3.0").

    Raises:
        ValueError: If slack is smaller than ``SLACK``.
    """
    if slack < SLACK:
        raise ValueError(f"slack must be at least {SLACK}, got {slack}")


def state_length(n: int, slack: int = SLACK) -> int:
    """Number of mixed-radix terms needed for n digits.

    Integer floor division keeps this exact for any n; a float round trip
    could undersize the vector, which corrupts trailing digits silently.

    Raises:
        ValueError: If slack is smaller than ``SLACK``.
    """
    check_slack(slack)
    return 10 * max(n, 0) // 3 + slack


def new_state(n: int, slack: int = SLACK) -> list[int]:
    """Allocate the state vector for n digits, every term set to 2."""
    return [INITIAL_TERM] * state_length(n, slack)


def normalize(state: list[int]) -> int:
    """Multiply the represented fraction by 10 and propagate carries.

    Walks the vector right to left from the last index down to 1. Each term
    is reduced modulo its radix ``2i + 1`` and the quotient, scaled by
    ``i``, is carried into the next lower term. ``state[0]`` is left
    untouched.

    Args:
        state: Mixed-radix state vector, updated in place

    Returns:
        The carry out of index 1.
    """
    carry = 0
    for i in range(len(state) - 1, 0, -1):
        radix = 2 * i + 1
        num = state[i] * 10 + carry
        state[i] = num % radix
        carry = num // radix * i
    return carry


def extract_digit(state: list[int]) -> int:
    """Run one outer iteration and return the candidate digit.

    The candidate is 0-9, or ``CARRY_OUT`` when the digit overflowed and
    the previous digit must be incremented.
    """
    carry = normalize(state)
    final = state[0] * 10 + carry
    state[0] = final % 10
    return min(final // 10, CARRY_OUT)


# =============================================================================
# Nines Buffering
# =============================================================================


class NinesBuffer:
    """Holds back digits until no later carry can change them.

    A candidate 9 may still become 0 (with the digit before it incremented)
    if a carry arrives later, so runs of 9s are only counted. They are
    released as 9s when a smaller digit follows, or as 0s after an
    incremented predigit when ``CARRY_OUT`` follows.

    Attributes:
        predigit: Last digit known not to end a run of 9s, still pending
        nines: Candidate 9s seen since predigit was set
    """

    def __init__(self):
        self.predigit = 0
        self.nines = 0
        self._primed = False

    def push(self, q: int) -> list[int]:
        """Feed one candidate digit.

        Args:
            q: Candidate digit from ``extract_digit``

        Returns:
            The digits committed by this candidate, possibly none.
        """
        if not self._primed:
            # Nothing to flush yet, so even a 9 is taken as the predigit.
            self._primed = True
            self.predigit = q
            return []

        if q == 9:
            self.nines += 1
            return []

        if q == CARRY_OUT:
            committed = [self.predigit + 1] + [0] * self.nines
            self.predigit = 0
        else:
            committed = [self.predigit] + [9] * self.nines
            self.predigit = q
        self.nines = 0
        return committed


# =============================================================================
# Generation
# =============================================================================


def iter_committed(n: int, slack: int = SLACK) -> Iterator[int]:
    """Yield committed digits of pi, starting with the leading 3.

    Runs at most ``n + 3`` outer iterations and stops as soon as ``n + 1``
    digits (the anchor plus n fractional digits) are committed. Fewer are
    yielded when the budget ends inside an unresolved run of 9s.

    Args:
        n: Number of fractional digits wanted
        slack: Extra state terms beyond floor(10n/3)

    Yields:
        Confirmed digits in order.
    """
    if n <= 0:
        return

    state = new_state(n, slack)
    buffer = NinesBuffer()
    wanted = n + 1
    committed = 0

    for _ in range(n + EXTRA_ROUNDS):
        for digit in buffer.push(extract_digit(state)):
            yield digit
            committed += 1
        if committed >= wanted:
            return


def stream_digits(n: int, slack: int = SLACK) -> Iterator[int]:
    """Yield up to n fractional digits of pi as they are confirmed.

    Control returns to the caller between digits, which is where a deadline
    can be checked.
    """
    digits = iter_committed(n, slack)
    next(digits, None)  # anchor
    for position, digit in enumerate(digits):
        if position >= n:
            return
        yield digit


def compute_digits(
    n: int,
    slack: int = SLACK,
    log=None,
    deadline: float | None = None,
) -> list[int]:
    """Compute exactly n fractional digits of pi.

    If the iteration budget runs out inside a run of 9s the computation is
    repeated for a longer target and truncated. Digits never change when
    more are requested, so the prefix is the answer for n.

    Args:
        n: Number of fractional digits
        slack: Extra state terms beyond floor(10n/3)
        log: Optional callable for progress messages
        deadline: Optional ``time.monotonic()`` value, checked between digits

    Returns:
        List of n digits (empty for n <= 0).

    Raises:
        TimeoutError: If the deadline passes before all digits are confirmed.
        ValueError: If slack is smaller than ``SLACK``.
    """
    check_slack(slack)
    if n <= 0:
        return []

    target = n
    while True:
        digits = []
        for digit in stream_digits(target, slack):
            if deadline is not None and time.monotonic() > deadline:
                raise TimeoutError(
                    f"{min(len(digits), n)} of {n} digits computed"
                )
            digits.append(digit)
        if len(digits) >= n:
            return digits[:n]
        if log:
            log(
                f"Only {len(digits)} of {n} digits confirmed "
                f"(unresolved nines), retrying with {target + LOOKAHEAD}"
            )
        target += LOOKAHEAD


def format_pi(digits: list[int]) -> str:
    """Render fractional digits as ``"3.<digits>"``."""
    return "3." + "".join(map(str, digits))


def generate(n: int, slack: int = SLACK) -> str:
    """Return pi as ``"3."`` followed by exactly n decimal digits.

    Negative n is treated as 0.

    Args:
        n: Number of digits after the decimal point
        slack: Extra state terms beyond floor(10n/3)

    Returns:
        The digits as text, e.g. ``generate(5) == "3.14159"``.

    Raises:
        ValueError: If slack is smaller than ``SLACK``.
    """
    return format_pi(compute_digits(n, slack))
