from __future__ import annotations

from typing import Sequence

from sort_uses_by_length._data import UseKind
from sort_uses_by_length._data import UseStatement

PSR12_KIND_ORDER = {
    UseKind.CLASS: 1,
    UseKind.FUNCTION: 2,
    UseKind.CONSTANT: 3,
}
LEGACY_KIND_ORDER = {
    UseKind.CLASS: 1,
    UseKind.CONSTANT: 2,
    UseKind.FUNCTION: 3,
}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def compare_use_statements(
    a: UseStatement,
    b: UseStatement,
    psr12_compatible: bool = True,
) -> int:
    """Order two use statements, returning -1, 0 or 1.

    Different kinds are ordered by kind priority. Within a kind, the shorter
    import string (name plus ' as alias') comes first and equal lengths are
    ordered bytewise.
    """
    if a.kind is not b.kind:
        order = PSR12_KIND_ORDER if psr12_compatible else LEGACY_KIND_ORDER
        return _sign(order[a.kind] - order[b.kind])

    # Lengths are byte lengths, so multibyte names measure like strlen()
    import_a = a.canonical.encode()
    import_b = b.canonical.encode()
    result = _sign(len(import_a) - len(import_b))
    if result == 0:
        result = (import_a > import_b) - (import_a < import_b)
    return result


def find_first_violation(
    use_statements: Sequence[UseStatement],
    psr12_compatible: bool = True,
) -> int | None:
    """Return the index of the first statement sorted before its predecessor."""
    for i in range(1, len(use_statements)):
        order = compare_use_statements(
            use_statements[i],
            use_statements[i - 1],
            psr12_compatible=psr12_compatible,
        )
        if order < 0:
            return i
    return None
