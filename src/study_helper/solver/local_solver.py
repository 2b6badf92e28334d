"""
Deterministic solver for a few canonical math-problem phrasings.

Recognized prompts:
- "... terminating decimal ..." with a fraction a/b
- "... rational or irrational ..." about sqrt(a/b), sqrt(n), pi, e, a/b,
  an integer or a finite decimal

Anything else is reported as no match (None), which tells the caller to fall
through to the AI providers. Parsing problems are never raised.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from study_helper.monitoring.metrics import local_solver_total
from study_helper.solver.number_theory import (
    is_perfect_square,
    reduce_fraction,
    strip_prime_factors,
)

logger = structlog.get_logger(__name__)

UNDEFINED_DENOMINATOR = "Undefined: denominator is 0."

FRACTION_RE = re.compile(r"(\d+)\s*/\s*(\d+)")
SQRT_FRACTION_RE = re.compile(r"(?:sqrt|√)\s*\(\s*(\d+)\s*/\s*(\d+)\s*\)")
SQRT_INTEGER_RE = re.compile(r"sqrt\s*\(\s*(\d+)\s*\)|√\s*\(?\s*(\d+)")
PI_RE = re.compile(r"\bpi\b|π")
# Standalone "e" only; "i.e." and "e.g." are abbreviations, not the constant
EULER_RE = re.compile(r"(?<![\w.])e(?!\w|\.\w)")
BARE_FRACTION_RE = re.compile(r"\b(\d+)\s*/\s*(\d+)\b")
NUMBER_RE = re.compile(r"(-?\d+)(?:\.(\d+))?")


class SolverRule(str, Enum):
    """Which recognizer produced a solution."""
    
    TERMINATING_DECIMAL = "terminating_decimal"
    SQRT_FRACTION = "sqrt_fraction"
    SQRT_INTEGER = "sqrt_integer"
    NAMED_CONSTANT = "named_constant"
    FRACTION = "fraction"
    FINITE_NUMBER = "finite_number"


@dataclass(frozen=True)
class LocalSolution:
    """Exact answer with its derivation, one step per line."""

    rule: SolverRule
    steps: tuple[str, ...]

    @property
    def solution(self) -> str:
        return "\n".join(self.steps)


def _mentions_terminating_decimal(text: str) -> bool:
    return "terminating" in text and "decimal" in text


def _mentions_rationality(text: str) -> bool:
    # "irrational" contains "rational", so this covers "rational or irrational"
    return "irrational" in text


def solve_terminating_decimal(text: str) -> Optional[LocalSolution]:
    """Decide whether the first fraction in the text has a terminating expansion."""
    match = FRACTION_RE.search(text)
    if not match:
        return None
    numerator, denominator = int(match.group(1)), int(match.group(2))
    if denominator == 0:
        return LocalSolution(SolverRule.TERMINATING_DECIMAL, (UNDEFINED_DENOMINATOR,))
    
    num, den, g = reduce_fraction(numerator, denominator)
    remaining = strip_prime_factors(den)
    terminates = remaining == 1
    steps = (
        f"Given fraction: {numerator}/{denominator}",
        f"Reduce to lowest terms: {num}/{den} (gcd = {g})",
        "In lowest terms, the decimal expansion terminates exactly when the denominator "
        "has no prime factors other than 2 and 5.",
        f"Remove all factors of 2 and 5 from {den}: remaining = {remaining}.",
        "Since remaining = 1, the decimal expansion terminates."
        if terminates
        else "Since remaining ≠ 1, the decimal expansion is non-terminating repeating.",
        "Answer: Terminating decimal expansion."
        if terminates
        else "Answer: Non-terminating repeating decimal expansion.",
    )
    return LocalSolution(SolverRule.TERMINATING_DECIMAL, steps)


def _classify_sqrt_fraction(a: int, b: int) -> LocalSolution:
    if b == 0:
        return LocalSolution(SolverRule.SQRT_FRACTION, (f"Given: sqrt({a}/{b})", UNDEFINED_DENOMINATOR))
    
    num, den, g = reduce_fraction(a, b)
    num_square = is_perfect_square(num)
    den_square = is_perfect_square(den)
    steps = [
        f"Given: sqrt({a}/{b})",
        f"Reduce the fraction inside the root: {a}/{b} = {num}/{den} (gcd = {g}).",
        f"Check perfect squares: numerator {num} {'is' if num_square else 'is not'} a perfect square; "
        f"denominator {den} {'is' if den_square else 'is not'} a perfect square.",
    ]
    if num_square and den_square:
        root_num, root_den = math.isqrt(num), math.isqrt(den)
        steps.append(
            f"sqrt({num}/{den}) = √{num}/√{den} = {root_num}/{root_den}, which is rational."
        )
        steps.append(f"Answer: Rational ({root_num}/{root_den}).")
    else:
        steps.append(
            f"Numerator and denominator are not both perfect squares after reduction, "
            f"so sqrt({num}/{den}) is irrational."
        )
        steps.append("Answer: Irrational.")
    return LocalSolution(SolverRule.SQRT_FRACTION, tuple(steps))


def _classify_sqrt_integer(n: int) -> LocalSolution:
    if is_perfect_square(n):
        root = math.isqrt(n)
        steps = (
            f"Given: sqrt({n})",
            f"{n} is a perfect square ({root}×{root}). Hence sqrt({n}) = {root}, which is rational.",
            f"Answer: Rational ({root}).",
        )
    else:
        steps = (
            f"Given: sqrt({n})",
            f"{n} is not a perfect square. Therefore sqrt({n}) is irrational.",
            "Answer: Irrational.",
        )
    return LocalSolution(SolverRule.SQRT_INTEGER, steps)


def solve_rationality(text: str) -> Optional[LocalSolution]:
    """
    Classify the quantity in the text as rational or irrational.
    
    Rules are tried in order and the first that applies wins:
    sqrt(a/b), sqrt(n), pi/e, a/b, integer or finite decimal.
    """
    compact = re.sub(r"\s+", "", text)
    
    match = SQRT_FRACTION_RE.search(text) or SQRT_FRACTION_RE.search(compact)
    if match:
        return _classify_sqrt_fraction(int(match.group(1)), int(match.group(2)))
    
    match = SQRT_INTEGER_RE.search(text) or SQRT_INTEGER_RE.search(compact)
    if match:
        return _classify_sqrt_integer(int(match.group(1) or match.group(2)))
    
    if PI_RE.search(text):
        return LocalSolution(
            SolverRule.NAMED_CONSTANT,
            ("π (pi) is a known irrational number. Therefore it is irrational.", "Answer: Irrational."),
        )
    if EULER_RE.search(text):
        return LocalSolution(
            SolverRule.NAMED_CONSTANT,
            ("e (Euler's number) is a known irrational number. Therefore it is irrational.", "Answer: Irrational."),
        )
    
    match = BARE_FRACTION_RE.search(text)
    if match:
        numerator, denominator = match.group(1), match.group(2)
        if int(denominator) == 0:
            return LocalSolution(SolverRule.FRACTION, (f"Given: {numerator}/{denominator}", UNDEFINED_DENOMINATOR))
        return LocalSolution(
            SolverRule.FRACTION,
            (
                f"Given: {numerator}/{denominator}. Any ratio of integers (with non-zero denominator) is rational.",
                "Answer: Rational.",
            ),
        )
    
    match = NUMBER_RE.search(text)
    if match:
        if match.group(2):
            step = f"Finite decimal {match.group(0)} can be written as a fraction over a power of 10, hence rational."
        else:
            step = f"Integer {match.group(1)} is rational (equal to {match.group(1)}/1)."
        return LocalSolution(SolverRule.FINITE_NUMBER, (step, "Answer: Rational."))
    
    return None


def try_local_solve(prompt: Optional[str]) -> Optional[LocalSolution]:
    """
    Solve the prompt locally when it matches a known phrasing.
    
    Args:
        prompt: Free-text problem statement
        
    Returns:
        LocalSolution, or None when the prompt is not recognized
    """
    if not prompt:
        return None
    text = str(prompt).lower()
    
    result: Optional[LocalSolution] = None
    try:
        if _mentions_terminating_decimal(text):
            result = solve_terminating_decimal(text)
        if result is None and _mentions_rationality(text):
            result = solve_rationality(text)
    except ValueError as e:
        # int() refuses digit runs past sys.get_int_max_str_digits()
        logger.debug("Local solver could not parse operand", error=str(e))
        result = None

    local_solver_total.labels(rule=result.rule.value if result else "no_match").inc()
    if result is not None:
        logger.info("Solved locally", rule=result.rule.value)
    return result
