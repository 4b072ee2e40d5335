"""Modular arithmetic used to snap an endpoint onto a step lattice."""


def mod(a: int, b: int) -> int:
    """Return ``a`` mod ``b`` in the arithmetical sense (always in ``[0, b)``).

    Python integers are unbounded, so this covers offsets of any width.

    Raises:
        ValueError: If the modulus is not positive
    """
    if b <= 0:
        raise ValueError(f"Modulus must be positive, got {b}")
    # Python's % floors, so the remainder takes the sign of the modulus
    return a % b


def difference_modulo(a: int, b: int, c: int) -> int:
    """Return ``(a - b)`` mod ``c``.

    This is how far ``a`` has to move back to land on the lattice of
    period ``c`` that passes through ``b``.
    """
    return mod(mod(a, c) - mod(b, c), c)
