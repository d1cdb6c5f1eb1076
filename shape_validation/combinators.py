"""
    Logical combinators for validators and predicates.
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

import typing
from typing import Any, Callable, TypeVar

from .predicates import (
    ValidatorFunction,
    is_missing,
    is_null,
    is_undefined,
)

T = TypeVar("T")
""" Invariant type variable for validated values. """

Check = Callable[[Any], Any]
"""
    Any function whose return value is interpreted as a boolean.
"""


def test(check: Check) -> ValidatorFunction[Any]:
    """
        Adapts an arbitrary boolean-returning function into a validator.
        Missing values (:obj:`None` and
        :obj:`~shape_validation.predicates.UNDEFINED`) are rejected before
        ``check`` is called, so ``check`` can assume a present value:

        >>> is_label = test(lambda label: label in ("HOME", "MOBILE"))

    """

    def validator(val: Any) -> bool:
        if is_missing(val):
            return False
        return bool(check(val))

    return typing.cast(ValidatorFunction[Any], validator)


def unsafe_test(check: Check) -> ValidatorFunction[Any]:
    """
        Same as :func:`test`, but missing values are passed on to ``check``,
        which is responsible for handling them.
    """

    def validator(val: Any) -> bool:
        return bool(check(val))

    return typing.cast(ValidatorFunction[Any], validator)


def and_(*checks: Check) -> ValidatorFunction[Any]:
    """
        Rejects missing values, otherwise requires every one of the ``checks``
        to pass, stopping at the first one that fails.
        With no checks, every present value passes.
    """

    def validator(val: Any) -> bool:
        if is_missing(val):
            return False
        return all(check(val) for check in checks)

    return typing.cast(ValidatorFunction[Any], validator)


def or_(*checks: Check) -> ValidatorFunction[Any]:
    """
        Rejects missing values, otherwise requires at least one of the
        ``checks`` to pass, stopping at the first one that succeeds.
        With no checks, every value fails.
    """

    def validator(val: Any) -> bool:
        if is_missing(val):
            return False
        return any(check(val) for check in checks)

    return typing.cast(ValidatorFunction[Any], validator)


def optional(check: ValidatorFunction[T]) -> ValidatorFunction[T]:
    """
        For fields which may be omitted:
        :obj:`~shape_validation.predicates.UNDEFINED` passes, :obj:`None`
        fails, any other value must satisfy ``check``.
    """

    def validator(val: Any) -> bool:
        if is_null(val):
            return False
        if is_undefined(val):
            return True
        return bool(check(val))

    return typing.cast(ValidatorFunction[T], validator)


def nullable(check: ValidatorFunction[T]) -> ValidatorFunction[T]:
    """
        For fields which may be explicitly empty:
        :obj:`None` passes, :obj:`~shape_validation.predicates.UNDEFINED`
        fails, any other value must satisfy ``check``.
    """

    def validator(val: Any) -> bool:
        if is_undefined(val):
            return False
        if is_null(val):
            return True
        return bool(check(val))

    return typing.cast(ValidatorFunction[T], validator)


def erratic(check: ValidatorFunction[T]) -> ValidatorFunction[T]:
    """
        For fields which may be absent in either form: both :obj:`None` and
        :obj:`~shape_validation.predicates.UNDEFINED` pass, any other value
        must satisfy ``check``.
    """

    def validator(val: Any) -> bool:
        if is_missing(val):
            return True
        return bool(check(val))

    return typing.cast(ValidatorFunction[T], validator)
