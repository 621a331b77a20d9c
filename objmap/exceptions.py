# Copyright (c) 2026 NASK. All rights reserved.

"""
Exception classes raised by the *objmap* machinery.

All errors signalling that some data could not be mapped (decoded or
encoded) are instances of subclasses of `MappingError`; each of them
provides the `type_name` and `path` attributes that identify where the
problem occurred.
"""

from typing import Optional

from objmap.common_helpers import (
    ascii_str,
    format_path,
)
from objmap.typing_helpers import Path


#
# Mapping (decoding/encoding) errors

class MappingError(Exception):

    """
    The base class of data mapping errors.

    Constructor args/kwargs:
        `msg` (positional):
            The error message.
        `type_name` (keyword-only; default: `None`):
            The name of the type which was being decoded/encoded when
            the error occurred (if known).
        `path` (keyword-only; default: empty tuple):
            A sequence of `str` (property names) and `int` (collection
            indexes) pointing to the offending value, starting from
            the top-level value being decoded/encoded.

    >>> exc = MappingError('something is wrong')
    >>> print(exc)
    something is wrong
    >>> exc.type_name is None and exc.path == ()
    True

    >>> exc = MappingError('"x" is not a number', type_name='Person',
    ...                    path=['FavoritePeople', 0, 'Age'])
    >>> print(exc)
    "x" is not a number [type: Person; path: FavoritePeople[0].Age]
    >>> exc.type_name
    'Person'
    >>> exc.path
    ('FavoritePeople', 0, 'Age')
    >>> exc.msg
    '"x" is not a number'
    """

    msg: str
    type_name: Optional[str]
    path: Path

    def __init__(self, msg, *, type_name=None, path=()):
        super().__init__(msg)
        self.msg = msg
        self.type_name = type_name
        self.path = tuple(path)

    def __str__(self):
        if self.type_name is None and not self.path:
            return ascii_str(self.msg)
        details = []
        if self.type_name is not None:
            details.append('type: {}'.format(ascii_str(self.type_name)))
        details.append('path: {}'.format(format_path(self.path)))
        return '{} [{}]'.format(ascii_str(self.msg), '; '.join(details))


class UnknownTypeError(MappingError, LookupError):

    """
    Raised when the requested type name (or class) is not registered.

    >>> exc = UnknownTypeError("no type registered as 'Usr'")
    >>> isinstance(exc, MappingError) and isinstance(exc, LookupError)
    True
    """


class ShapeMismatchError(MappingError):

    """
    Raised when the structural kind of a value (object/mapping,
    array/sequence or scalar) does not match what the target type or
    property requires.
    """


class TypeCoercionError(MappingError):

    """
    Raised when a scalar value cannot be coerced to (when decoding), or
    does not conform to (when encoding), the declared scalar type.
    """


class DateFormatError(MappingError):

    """
    Raised when a value of a date/time property does not match the
    configured date format (or is not a date/time value at all).
    """


class MissingElementTypeMappingError(MappingError):

    """
    Raised when a collection property is being decoded but the
    collection element map of its type has no entry for it.
    """


class NestingTooDeepError(MappingError):

    """
    Raised when the maximum nesting depth (see the `max_depth` argument
    of the `Decoder`/`Encoder` constructors) is exceeded.
    """


#
# Other exceptions

class FieldValueError(ValueError):

    """
    Intended to be raised in the `decode_value()`/`encode_value()`
    methods of `objmap.fields.Field` subclasses.

    Typically, this exception is caught by the decoder/encoder machinery
    and then -- appropriately -- `TypeCoercionError` or `DateFormatError`
    (with the type name and path added) is raised from it.
    """


class RegistryFrozenError(RuntimeError):

    """
    Raised on an attempt to register a type in a frozen type registry.
    """
