"""
    Composable runtime validators for structured data.
"""

__version__ = "0.1.0"

from .predicates import (
    UNDEFINED,
    ValidatorFunction,
    is_null,
    is_undefined,
    is_missing,
    is_typeof,
    is_string,
    is_boolean,
    is_number,
    is_valid_number,
    is_value_of,
    is_array,
    is_iterable,
    number_between,
)
from .combinators import (
    test,
    unsafe_test,
    and_,
    or_,
    optional,
    nullable,
    erratic,
)
from .validation import (
    Validation,
    RecordValidator,
    IterableValidator,
    validator_map,
    iterable_validator,
)
from .tree import (
    InvalidDescriptorError,
    Leaf,
    Node,
    validation_map,
    validation_tree,
)

# re-export all predicates, combinators and validator builders.
__all__ = [
    "UNDEFINED",
    "ValidatorFunction",
    "is_null",
    "is_undefined",
    "is_missing",
    "is_typeof",
    "is_string",
    "is_boolean",
    "is_number",
    "is_valid_number",
    "is_value_of",
    "is_array",
    "is_iterable",
    "number_between",
    "test",
    "unsafe_test",
    "and_",
    "or_",
    "optional",
    "nullable",
    "erratic",
    "Validation",
    "RecordValidator",
    "IterableValidator",
    "validator_map",
    "iterable_validator",
    "InvalidDescriptorError",
    "Leaf",
    "Node",
    "validation_map",
    "validation_tree",
]
