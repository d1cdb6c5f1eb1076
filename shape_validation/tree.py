"""
    Compilation of nested descriptor trees into record validators.
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
import typing
from typing import Any, Mapping, Union

from .predicates import ValidatorFunction
from .validation import FieldMap, RecordValidator, validator_map

if sys.version_info[1] >= 8:
    from typing import final
else:
    from typing_extensions import final

if sys.version_info[1] >= 11:
    from typing import Self
else:
    from typing_extensions import Self

_logger = logging.getLogger(__name__)


class InvalidDescriptorError(TypeError):
    """
        Class for errors raised when a descriptor tree contains a node which
        is neither a leaf predicate nor a nested descriptor.
    """


@final
class Leaf:
    """
        Explicit leaf node of a descriptor tree, holding a predicate which is
        used unchanged as the validator for its field.
    """

    _check: ValidatorFunction[Any]

    __slots__ = ("_check",)

    def __new__(cls, check: ValidatorFunction[Any]) -> Self:
        if not callable(check):
            raise InvalidDescriptorError(
                f"Expected callable leaf predicate, got {check!r}."
            )
        instance = super().__new__(cls)
        instance._check = check
        return instance

    @property
    def check(self) -> ValidatorFunction[Any]:
        """ The predicate held by this leaf. """
        return self._check

    def __repr__(self) -> str:
        return f"Leaf({self._check!r})"


@final
class Node:
    """
        Explicit inner node of a descriptor tree, holding a nested descriptor
        which is compiled into a record validator for its field.
    """

    _descriptor: Descriptor

    __slots__ = ("_descriptor",)

    def __new__(cls, descriptor: Descriptor) -> Self:
        if not isinstance(descriptor, collections_abc.Mapping):
            raise InvalidDescriptorError(
                f"Expected mapping as nested descriptor, got {descriptor!r}."
            )
        instance = super().__new__(cls)
        instance._descriptor = descriptor
        return instance

    @property
    def descriptor(self) -> Descriptor:
        """ The nested descriptor held by this node. """
        return self._descriptor

    def __repr__(self) -> str:
        return f"Node({self._descriptor!r})"


DescriptorNode = Union[
    Leaf, Node, ValidatorFunction[Any], Mapping[str, Any]
]
"""
    A node of a descriptor tree. Plain callables are treated as
    :class:`Leaf` nodes and plain mappings as :class:`Node` nodes.
"""

Descriptor = Mapping[str, DescriptorNode]
"""
    A descriptor tree: a mapping from field names to descriptor nodes.
"""


def _compile_node(key: str, node: Any) -> ValidatorFunction[Any]:
    if isinstance(node, Leaf):
        return node.check
    if isinstance(node, Node):
        node = node.descriptor
    elif callable(node):
        return typing.cast(ValidatorFunction[Any], node)
    if isinstance(node, collections_abc.Mapping):
        _logger.debug("Compiling nested descriptor for field %r", key)
        return validator_map(validation_map(node))
    raise InvalidDescriptorError(
        f"For field {key!r}, expected leaf predicate or nested descriptor, "
        f"got {node!r}."
    )


def validation_map(descriptor: Descriptor) -> FieldMap:
    """
        Compiles a descriptor tree into a flat field map, suitable for
        :func:`~shape_validation.validation.validator_map`:

        - leaf predicates are used unchanged as field validators;
        - nested descriptors are compiled recursively and wrapped into
          record validators.

        :raises InvalidDescriptorError: if a node is neither a leaf predicate
                                        nor a nested descriptor
    """
    if not isinstance(descriptor, collections_abc.Mapping):
        raise InvalidDescriptorError(
            f"Expected mapping as descriptor, got {descriptor!r}."
        )
    field_map: typing.Dict[str, ValidatorFunction[Any]] = {}
    for key, node in descriptor.items():
        field_map[key] = _compile_node(key, node)
    return field_map


def validation_tree(descriptor: Descriptor) -> RecordValidator[Any]:
    """
        Compiles a descriptor tree into a :class:`RecordValidator`.
        This is the same as nesting
        :func:`~shape_validation.validation.validator_map` by hand:

        >>> from shape_validation import validation_tree, is_string, is_valid_number
        >>> is_person = validation_tree({
        ...     "name": {"given": is_string, "family": is_string},
        ...     "age": is_valid_number,
        ... })
        >>> is_person({"name": {"given": "Bob", "family": "X"}, "age": 30})
        True
        >>> is_person["name"]["given"](123)
        False

        :raises InvalidDescriptorError: if a node is neither a leaf predicate
                                        nor a nested descriptor
    """
    return validator_map(validation_map(descriptor))
