"""
Deterministic fallback solver.

- number_theory.py: gcd reduction, prime-factor stripping, perfect squares
- local_solver.py: phrase recognizers and derivations
"""

from study_helper.solver.local_solver import LocalSolution, SolverRule, try_local_solve

__all__ = ["LocalSolution", "SolverRule", "try_local_solve"]
