"""Row search primitive: match a column against a literal."""

from __future__ import annotations

from enum import Enum


class Operator(Enum):
    """Comparison operators accepted in WHERE predicates."""

    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    NUM_EQ = "-eq"
    NUM_NE = "-ne"
    NUM_GT = "-gt"
    NUM_GE = "-ge"
    NUM_LT = "-lt"
    NUM_LE = "-le"

    @classmethod
    def parse(cls, text: str) -> Operator:
        """Return the operator spelled by text.

        The dashed numeric forms are matched case-insensitively.
        """
        key = text.lower() if text.startswith("-") else text
        try:
            return OPERATOR_NAMES[key]
        except KeyError:
            raise ValueError(f"Unknown operator '{text}'") from None

    @property
    def is_numeric(self) -> bool:
        return self.value.startswith("-")


OPERATOR_NAMES: dict[str, Operator] = {op.value: op for op in Operator}


def _to_number(text: str) -> int | float | None:
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def compare(operator: Operator, value: str, literal: str) -> bool:
    """Compare a single cell value against a literal."""
    if operator is Operator.EQ:
        return value == literal
    if operator is Operator.NE:
        return value != literal

    left = _to_number(value)
    right = _to_number(literal)

    if operator in (Operator.GT, Operator.LT):
        if left is None or right is None:
            # Fall back to string ordering when either side is not a number
            return value > literal if operator is Operator.GT else value < literal
        return left > right if operator is Operator.GT else left < right

    if left is None or right is None:
        return False
    if operator is Operator.NUM_EQ:
        return left == right
    elif operator is Operator.NUM_NE:
        return left != right
    elif operator is Operator.NUM_GT:
        return left > right
    elif operator is Operator.NUM_GE:
        return left >= right
    elif operator is Operator.NUM_LT:
        return left < right
    elif operator is Operator.NUM_LE:
        return left <= right
    return False


def search(operator: Operator | str, values: list[str], literal: str) -> frozenset[int]:
    """Return the row indices whose value satisfies the comparison.

    ``values`` is a table column with the header at index 0, which is
    never matched. Raises ValueError for an unknown operator spelling.
    """
    if isinstance(operator, str):
        operator = Operator.parse(operator)
    return frozenset(
        index for index in range(1, len(values)) if compare(operator, values[index], literal)
    )
