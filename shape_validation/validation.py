"""
    Record validators and iterable validators, which can be called to validate
    a value and indexed to look up the validators for individual fields.
"""

# Copyright (C) 2023 Hashberg Ltd

# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 2.1 of the License, or (at your option) any later version.

# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.

# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301
# USA

from __future__ import annotations

import collections.abc as collections_abc
import logging
import sys
from types import MappingProxyType
import typing
from typing import Any, Generic, Mapping, Optional, TypeVar

from .predicates import UNDEFINED, ValidatorFunction, is_iterable, is_missing

if sys.version_info[1] >= 8:
    from typing import final
else:
    from typing_extensions import final

if sys.version_info[1] >= 10:
    from typing import TypeGuard
else:
    from typing_extensions import TypeGuard

if sys.version_info[1] >= 11:
    from typing import Self
else:
    from typing_extensions import Self

_logger = logging.getLogger(__name__)

T = TypeVar("T")
""" Invariant type variable for validated values. """

FieldMap = Mapping[str, ValidatorFunction[Any]]
"""
    Mapping from each declared field name of a structured type to the
    validator for that field's value.
"""

_no_fields: FieldMap = MappingProxyType({})


def _read_field(val: Any, key: str) -> Any:
    """
        Reads the field ``key`` off ``val``: item access for mappings,
        attribute access otherwise. Returns
        :obj:`~shape_validation.predicates.UNDEFINED` if the field is not
        present.
    """
    if isinstance(val, collections_abc.Mapping):
        # 'in' before indexing, so that e.g. defaultdicts are not modified
        if key in val:
            return val[key]
        return UNDEFINED
    return getattr(val, key, UNDEFINED)


class Validation(Generic[T]):
    r"""
        A validator which also acts as a lookup table for the validators of
        its fields:

        - ``v(val)`` validates ``val``, narrowing it to ``T`` on success;
        - ``v[key]`` returns the validator for field ``key``, raising
          :obj:`KeyError` if no such field is declared;
        - ``v.get(key)`` returns the validator for field ``key``, or
          :obj:`None` if no such field is declared.

        Lookup goes exclusively through the field table, never through
        attributes, so that fields can be called e.g. ``"name"``, ``"get"``
        or ``"fields"`` without clashing with anything.
    """

    __slots__ = ("__weakref__",)

    def __new__(cls) -> Self:
        if cls is Validation:
            raise TypeError(
                "Validation cannot be instantiated directly, "
                "use validator_map or iterable_validator."
            )
        return super().__new__(cls)

    @property
    def fields(self) -> FieldMap:
        """
            Read-only view of the field validators available for lookup.
        """
        raise NotImplementedError()

    def __call__(self, val: Any) -> TypeGuard[T]:
        raise NotImplementedError()

    def __getitem__(self, key: str) -> ValidatorFunction[Any]:
        fields = self.fields
        if not isinstance(key, str) or key not in fields:
            raise KeyError(key)
        return fields[key]

    def get(
        self, key: Any, default: Optional[ValidatorFunction[Any]] = None
    ) -> Optional[ValidatorFunction[Any]]:
        """
            Returns the validator for field ``key``, or ``default`` if no such
            field is declared.
        """
        if not isinstance(key, str):
            return default
        return self.fields.get(key, default)

    def __contains__(self, key: Any) -> bool:
        return isinstance(key, str) and key in self.fields


@final
class RecordValidator(Validation[T]):
    r"""
        Validator for a structured type, compiled from a field map.

        A value is valid if it is not missing and if, for every declared field
        in map order, the field's value (read via item access for mappings and
        attribute access otherwise) satisfies the field's validator. Fields
        not present on the value are passed as
        :obj:`~shape_validation.predicates.UNDEFINED`, so they fail unless
        their validator accepts absence (see
        :func:`~shape_validation.combinators.optional`).

        >>> from shape_validation import validator_map, is_string, is_number
        >>> v = validator_map({"a": is_string, "b": is_number})
        >>> v({"a": "x", "b": 1})
        True
        >>> v({"a": "x"})
        False
        >>> v["a"] is is_string
        True
    """

    _fields: FieldMap

    __slots__ = ("_fields",)

    def __new__(cls, fields: FieldMap) -> Self:
        """
            Creates a new record validator from the given field map.

            :raises TypeError: if a field name is not a string
            :raises TypeError: if a field validator is not callable
        """
        field_dict: typing.Dict[str, ValidatorFunction[Any]] = {}
        for key, check in fields.items():
            if not isinstance(key, str):
                raise TypeError(f"Expected string field name, got {key!r}.")
            if not callable(check):
                raise TypeError(
                    f"Expected callable validator for field {key!r}, "
                    f"got {check!r}."
                )
            field_dict[key] = check
        instance = super().__new__(cls)
        instance._fields = MappingProxyType(field_dict)
        _logger.debug(
            "Built record validator with fields %s", list(field_dict)
        )
        return instance

    @property
    def fields(self) -> FieldMap:
        return self._fields

    def __call__(self, val: Any) -> TypeGuard[T]:
        if is_missing(val):
            return False
        for key, check in self._fields.items():
            if not check(_read_field(val, key)):
                return False
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._fields)!r})"


@final
class IterableValidator(Validation[typing.Iterable[T]]):
    r"""
        Validator for finite iterables, each item of which must satisfy a
        given item validator.

        Strings are never valid (see
        :func:`~shape_validation.predicates.is_iterable`), the empty iterable
        is always valid, and other iterables are consumed once, in order,
        stopping at the first invalid item.

        Field lookup is forwarded to the item validator, when the latter is
        itself a :class:`Validation`: this gives access to the validators for
        the fields of a single item. If the item validator has no fields, all
        lookups are absent.
    """

    _item_check: ValidatorFunction[T]

    __slots__ = ("_item_check",)

    def __new__(cls, item_check: ValidatorFunction[T]) -> Self:
        """
            Creates a new iterable validator from the given item validator.

            :raises TypeError: if the item validator is not callable
        """
        if not callable(item_check):
            raise TypeError(
                f"Expected callable item validator, got {item_check!r}."
            )
        instance = super().__new__(cls)
        instance._item_check = item_check
        return instance

    @property
    def item_check(self) -> ValidatorFunction[T]:
        """
            The validator for individual items.
        """
        return self._item_check

    @property
    def fields(self) -> FieldMap:
        item_check = self._item_check
        if isinstance(item_check, Validation):
            return item_check.fields
        return _no_fields

    def __call__(self, val: Any) -> TypeGuard[typing.Iterable[T]]:
        if not is_iterable(val):
            return False
        item_check = self._item_check
        for item in val:
            if not item_check(item):
                return False
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._item_check!r})"


def validator_map(fields: FieldMap) -> RecordValidator[Any]:
    """
        Compiles a field map into a :class:`RecordValidator`.

        Nested record validators can be used as field validators, giving
        chained lookup:

        >>> is_person = validator_map({
        ...     "name": validator_map({"given": is_string}),
        ...     "age": is_valid_number,
        ... })
        >>> is_person["name"]["given"]("Bob")
        True

        :raises TypeError: if a field name is not a string
        :raises TypeError: if a field validator is not callable
    """
    return RecordValidator(fields)


def iterable_validator(
    item_check: ValidatorFunction[T],
) -> IterableValidator[T]:
    """
        Lifts a validator for items into an :class:`IterableValidator` for
        finite iterables of such items.

        :raises TypeError: if the item validator is not callable
    """
    return IterableValidator(item_check)
