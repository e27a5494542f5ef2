from enum import Enum


class SpecificationOperator(str, Enum):
    """Supported operators for specifications."""

    # Attribute comparison
    EQ = "="
    NE = "!="
    IN = "in"
    NOT_IN = "not_in"

    # Logical operators
    AND = "and"
    OR = "or"
    NOT = "not"


LOGICAL_OPERATORS: frozenset[str] = frozenset(
    {
        SpecificationOperator.AND.value,
        SpecificationOperator.OR.value,
        SpecificationOperator.NOT.value,
    }
)

# Deepest specification tree accepted from text or dicts. Evaluation and
# serialisation recurse once per level.
MAX_NESTING_DEPTH = 100
