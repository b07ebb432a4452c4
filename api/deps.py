"""
FastAPI dependency providers.

Provides the shared set-class dictionary and the run-size limit for matrix
analysis. Both are read from the environment once and reused across
requests.

Environment:
    SET_CLASS_TABLE       Path to a reference table; unset = bundled table.
    MATRIX_MAX_SNAPSHOTS  Largest matrix (in rotation snapshots) a single
                          request may analyze. Default 100000.
"""

import os

from core.set_theory.dictionary import SetClassDictionary, load_set_class_dictionary

DEFAULT_MAX_SNAPSHOTS = 100_000

_dictionary: SetClassDictionary | None = None


def get_set_class_dictionary() -> SetClassDictionary:
    """
    Return the shared ``SetClassDictionary`` singleton.

    Loaded on first call from ``SET_CLASS_TABLE`` when set, otherwise from the
    table bundled with the package. The dictionary is immutable, so one
    instance serves every request.
    """
    global _dictionary  # noqa: PLW0603
    if _dictionary is None:
        _dictionary = load_set_class_dictionary(os.getenv("SET_CLASS_TABLE") or None)
    return _dictionary


def get_max_snapshots() -> int:
    """Return the per-request snapshot limit from ``MATRIX_MAX_SNAPSHOTS``."""
    raw = os.getenv("MATRIX_MAX_SNAPSHOTS")
    if not raw:
        return DEFAULT_MAX_SNAPSHOTS
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"MATRIX_MAX_SNAPSHOTS must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"MATRIX_MAX_SNAPSHOTS must be positive, got {value}")
    return value
