"""
    Leaf predicates for primitive values, together with the markers used to
    represent missing values.
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
import math
import sys
import typing
from typing import Any, TypeVar, Union

if sys.version_info[1] >= 8:
    from typing import Protocol, final
else:
    from typing_extensions import Protocol, final

if sys.version_info[1] >= 10:
    from typing import TypeGuard
else:
    from typing_extensions import TypeGuard

T = TypeVar("T")
""" Invariant type variable for validated values. """

V = TypeVar("V")
""" Invariant type variable for literal values in :func:`is_value_of`. """


class ValidatorFunction(Protocol[T]):
    """
        Structural type for validator functions.
    """

    def __call__(self, val: Any) -> TypeGuard[T]:
        """
            Returns :obj:`True` if ``val`` conforms to the shape checked by this
            validator, narrowing it to ``T``, and :obj:`False` otherwise.
        """


@final
class _Undefined:
    """
        Type of the :obj:`UNDEFINED` marker.
    """

    __slots__ = ()

    _instance: typing.ClassVar[Union[_Undefined, None]] = None

    def __new__(cls) -> _Undefined:
        instance = cls._instance
        if instance is None:
            instance = super().__new__(cls)
            cls._instance = instance
        return instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()
"""
    Marker for a value which is not present, e.g. a field read off a mapping
    which does not have the field's key. Distinct from :obj:`None`, which marks
    a value that is present but explicitly empty.
"""


def is_null(val: Any) -> bool:
    """ Whether ``val`` is :obj:`None`. """
    return val is None


def is_undefined(val: Any) -> bool:
    """ Whether ``val`` is :obj:`UNDEFINED`. """
    return val is UNDEFINED


def is_missing(val: Any) -> bool:
    """ Whether ``val`` is either :obj:`None` or :obj:`UNDEFINED`. """
    return val is None or val is UNDEFINED


def is_typeof(*types: type) -> ValidatorFunction[Any]:
    r"""
        Returns a predicate checking that a value is an instance of one of the
        given ``types``.

        Booleans have their own type tag: although :obj:`bool` is a subclass
        of :obj:`int`, a boolean only satisfies the predicate if :obj:`bool`
        (or :obj:`object`) is explicitly listed.

        >>> is_typeof(int)(3)
        True
        >>> is_typeof(int)(True)
        False
        >>> is_typeof(int, bool)(True)
        True

        :raises TypeError: if any of ``types`` is not a type
    """
    for t in types:
        if not isinstance(t, type):
            raise TypeError(f"Expected type, got {t!r}.")
    accepts_bool = bool in types or object in types

    def check(val: Any) -> bool:
        if isinstance(val, bool) and not accepts_bool:
            return False
        return isinstance(val, types)

    return typing.cast(ValidatorFunction[Any], check)


is_string = typing.cast(ValidatorFunction[str], is_typeof(str))
""" Checks that a value is a :obj:`str`. """

is_boolean = typing.cast(ValidatorFunction[bool], is_typeof(bool))
""" Checks that a value is a :obj:`bool`. """

is_number = typing.cast(
    ValidatorFunction[Union[int, float]], is_typeof(int, float)
)
""" Checks that a value is an :obj:`int` or a :obj:`float` (not a :obj:`bool`). """


def is_valid_number(val: Any) -> TypeGuard[Union[int, float]]:
    """
        Checks that a value is a number (see :obj:`is_number`) and that it is
        not NaN.
    """
    if not is_number(val):
        return False
    return not (isinstance(val, float) and math.isnan(val))


def is_value_of(value: V) -> ValidatorFunction[V]:
    """
        Returns a predicate checking strict equality to the given literal
        value, e.g. for enum or tag fields.

        Equality is strict: the value must also have the same type tag as
        ``value``, so that ``is_value_of(1)`` rejects ``True`` and ``"1"``.
        Numbers share a single tag (see :obj:`is_number`), so that
        ``is_value_of(1)`` accepts ``1.0``.
    """
    value_is_number = is_number(value)
    value_t = type(value)

    def check(val: Any) -> bool:
        if value_is_number:
            if not is_number(val):
                return False
        elif type(val) is not value_t:
            return False
        return bool(val == value)

    return typing.cast(ValidatorFunction[V], check)


def is_array(val: Any) -> TypeGuard[typing.Sequence[Any]]:
    """
        Checks that a value is a sequential, indexable, ordered collection.
        Text and binary strings are not arrays.
    """
    if isinstance(val, (str, bytes, bytearray)):
        return False
    return isinstance(val, collections_abc.Sequence)


def is_iterable(val: Any) -> TypeGuard[typing.Iterable[Any]]:
    """
        Checks that a value can be iterated over.

        A :obj:`str` is iterable over its characters, but it is never
        classified as iterable by this predicate.
    """
    if isinstance(val, str):
        return False
    return isinstance(val, collections_abc.Iterable)


def number_between(min: Any, max: Any) -> typing.Callable[[Any], bool]:
    """
        Returns a predicate which is true for ``min <= x < max``.
        The range is half-open: ``max`` itself is rejected.

        Values which are not numbers (see :obj:`is_number`) are rejected:

        >>> number_between(1989, 2003)(1995)
        True
        >>> number_between(1989, 2003)(None)
        False
    """
    # pylint: disable = redefined-builtin

    def check(val: Any) -> bool:
        if not is_number(val):
            return False
        return bool(min <= val < max)

    return check
