"""Independent digits of pi from mpmath, for checking spigot output."""

from dataclasses import dataclass

from mpmath import mp, mpf, workdps

GUARD_DIGITS = 20


@dataclass
class Mismatch:
    """First point where two renderings of pi disagree.

    Attributes:
        position: 1-based fractional digit position
        expected: Reference digit, or None if the reference is shorter
        actual: Checked digit, or None if the checked text is shorter
    """

    position: int
    expected: str | None
    actual: str | None

    def describe(self) -> str:
        return (
            f"digit {self.position}: expected {self.expected or '<end>'}, "
            f"got {self.actual or '<end>'}"
        )


def reference_pi(n: int) -> str:
    """Return ``"3."`` plus the first n digits of pi, truncated.

    ``str(mp.pi)`` rounds the last digit, so the digits are taken from
    ``floor(pi * 10**n)`` evaluated with guard digits instead.
    """
    if n <= 0:
        return "3."
    with workdps(n + GUARD_DIGITS):
        scaled = int(mp.floor(mp.pi * mpf(10) ** n))
    return "3." + str(scaled)[1:]


def first_mismatch(actual: str, expected: str) -> Mismatch | None:
    """Compare the fractional digits of two ``"3.<digits>"`` strings."""
    actual_digits = actual.partition(".")[2]
    expected_digits = expected.partition(".")[2]

    for position, (a, e) in enumerate(zip(actual_digits, expected_digits), start=1):
        if a != e:
            return Mismatch(position=position, expected=e, actual=a)

    if len(actual_digits) != len(expected_digits):
        position = min(len(actual_digits), len(expected_digits)) + 1
        return Mismatch(
            position=position,
            expected=expected_digits[position - 1 : position] or None,
            actual=actual_digits[position - 1 : position] or None,
        )
    return None


def verify(text: str) -> Mismatch | None:
    """Check spigot output against mpmath digits of the same length."""
    return first_mismatch(text, reference_pi(len(text.partition(".")[2])))
