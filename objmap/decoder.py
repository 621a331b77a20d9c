# Copyright (c) 2026 NASK. All rights reserved.

"""
Decoding: untyped value trees (such as those produced by `json.loads()`)
to instances of registered types.

>>> from objmap.fields import IntegerField, ObjectField, StringField
>>> from objmap.mapped_object import MappedObject
>>> from objmap.registry import TypeRegistry
>>> registry = TypeRegistry()
>>> @registry.register_class
... class User(MappedObject):
...     Username = StringField()
...     Championships = IntegerField()
...
>>> @registry.register_class
... class Place(MappedObject):
...     Name = StringField()
...     CreatedByUser = ObjectField('User')
...
>>> decoder = Decoder(registry)
>>> place = decoder.decode('Place', {
...     'Name': 'Bryant-Denny Stadium',
...     'CreatedByUser': {'Username': 'Big Al', 'Championships': '15'},
... })
>>> place.CreatedByUser.Username
'Big Al'
>>> place.CreatedByUser.Championships
15
>>> decoder.decode('Place', {'CreatedByUser': ['Big Al']})  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
  ...
objmap.exceptions.ShapeMismatchError: ...
"""

import json
from collections.abc import Mapping

from objmap.class_helpers import is_seq
from objmap.common_helpers import (
    ascii_str,
    format_path,
)
from objmap.const import DEFAULT_MAX_DEPTH
from objmap.datetime_policy import DEFAULT_DATE_CONVERSION_POLICY
from objmap.exceptions import (
    FieldValueError,
    MissingElementTypeMappingError,
    NestingTooDeepError,
    ShapeMismatchError,
    UnknownTypeError,
)
from objmap.fields import (
    COLLECTION_KIND,
    OBJECT_KIND,
    ObjectField,
    make_element_field,
)
from objmap.log_helpers import get_logger
from objmap.registry import default_registry
from objmap.typing_helpers import (
    JsonableDict,
    JsonableSeq,
    TypeRef,
)


__all__ = [
    'Decoder',
]


LOGGER = get_logger(__name__)


class Decoder(object):

    """
    Decoder of untyped value trees.

    Constructor args/kwargs:
        `registry` (default: `None`):
            The `objmap.registry.TypeRegistry` to resolve types with;
            `None` means: `objmap.registry.default_registry`.
        `date_policy` (default: `None`):
            The `objmap.datetime_policy.DateConversionPolicy` to parse
            date/time values with; `None` means:
            `objmap.datetime_policy.DEFAULT_DATE_CONVERSION_POLICY`.
        `max_depth` (default: `objmap.const.DEFAULT_MAX_DEPTH`):
            The maximum nesting depth of objects and collections.

    A decoder keeps no per-call state, so one instance can be used
    many times (also by concurrent threads).

    All exceptions related to data being decoded are instances of
    `objmap.exceptions.MappingError` subclasses (with the `type_name`
    and `path` attributes set appropriately).  The first problem found
    stops decoding (no partial results are returned).
    """

    def __init__(self, registry=None, date_policy=None, max_depth=DEFAULT_MAX_DEPTH):
        if registry is None:
            registry = default_registry
        if date_policy is None:
            date_policy = DEFAULT_DATE_CONVERSION_POLICY
        if not isinstance(max_depth, int) or max_depth < 0:
            raise ValueError('max_depth={!a} is not a non-negative int'.format(max_depth))
        self._registry = registry
        self._date_policy = date_policy
        self._max_depth = max_depth

    @property
    def registry(self):
        return self._registry

    @property
    def date_policy(self):
        return self._date_policy

    @property
    def max_depth(self):
        return self._max_depth


    #
    # public interface

    def decode(self, type_name: TypeRef, value: JsonableDict):
        """
        Decode the given untyped object (mapping) as an instance of the
        specified type.

        Args:
            `type_name`:
                The name of a registered type (or the registered class).
            `value`:
                A mapping (e.g., a dict produced by `json.loads()`).

        Returns:
            A new instance of the type, populated with decoded values
            of those of its declared properties that are present (and
            not null) in `value`; other properties are left unset
            (`None`); keys not corresponding to any declared property
            are ignored.

        Raises:
            `objmap.exceptions.MappingError` (one of its subclasses).
        """
        entry = self._resolve(type_name, owner_type_name=None, path=())
        return self._decode_object(entry, value, path=(), depth=0)

    def decode_array(self, element_type_name: TypeRef, value: JsonableSeq) -> list:
        """
        Decode the given untyped array (list or tuple) as a list of
        instances of the specified type.

        Each element is decoded as with `decode()` (so, in particular,
        a `None` element causes `objmap.exceptions.ShapeMismatchError`).
        """
        entry = self._resolve(element_type_name, owner_type_name=None, path=())
        if not is_seq(value):
            raise ShapeMismatchError(
                'expected an array of {} objects, got {}'.format(
                    ascii_str(entry.type_name),
                    _describe_shape(value)),
                type_name=entry.type_name)
        return [
            self._decode_object(entry, element, path=(i,), depth=1)
            for i, element in enumerate(value)]

    def decode_text(self, type_name, text, parser=json.loads):
        """
        Parse the given text (by default, as JSON) and decode the result
        with `decode()`.  Parser exceptions are propagated unchanged.
        """
        return self.decode(type_name, parser(text))

    def decode_array_text(self, element_type_name, text, parser=json.loads):
        """Like `decode_text()`, but using `decode_array()`."""
        return self.decode_array(element_type_name, parser(text))


    #
    # non-public internals

    def _resolve(self, type_ref, owner_type_name, path):
        try:
            return self._registry.resolve_ref(type_ref)
        except UnknownTypeError as exc:
            raise UnknownTypeError(
                exc.msg,
                type_name=owner_type_name,
                path=path) from None

    def _check_depth(self, type_name, path, depth):
        if depth > self._max_depth:
            raise NestingTooDeepError(
                'maximum nesting depth ({}) exceeded'.format(self._max_depth),
                type_name=type_name,
                path=path)

    def _decode_object(self, entry, value, path, depth):
        type_name = entry.type_name
        self._check_depth(type_name, path, depth)
        if not isinstance(value, Mapping):
            raise ShapeMismatchError(
                'expected an object, got {}'.format(_describe_shape(value)),
                type_name=type_name,
                path=path)
        instance = entry.new_instance()
        for prop in entry.properties:
            prop_value = value.get(prop.name)
            if prop_value is None:
                # absent or null: the property stays at its zero value
                continue
            prop_path = path + (prop.name,)
            if prop.field.kind == COLLECTION_KIND:
                decoded = self._decode_collection(entry, prop, prop_value, prop_path, depth + 1)
            else:
                decoded = self._decode_value(entry.type_name, prop.field, prop_value,
                                             prop_path, depth + 1)
            prop.set(instance, decoded)
        self._log_ignored_keys(entry, value, path)
        return instance

    def _decode_collection(self, entry, prop, value, path, depth):
        self._check_depth(entry.type_name, path, depth)
        if not is_seq(value):
            raise ShapeMismatchError(
                'expected an array, got {}'.format(_describe_shape(value)),
                type_name=entry.type_name,
                path=path)
        element_type_id = entry.get_element_type(prop.name)
        if element_type_id is None:
            raise MissingElementTypeMappingError(
                'no element type declared for the collection property {!a}'.format(prop.name),
                type_name=entry.type_name,
                path=path)
        element_field = make_element_field(element_type_id)
        return [
            (None if element is None
             else self._decode_value(entry.type_name, element_field, element,
                                     path + (i,), depth + 1))
            for i, element in enumerate(value)]

    def _decode_value(self, owner_type_name, field, value, path, depth):
        if field.kind == OBJECT_KIND:
            assert isinstance(field, ObjectField)
            nested_entry = self._resolve(field.type_ref, owner_type_name, path)
            return self._decode_object(nested_entry, value, path, depth)
        if isinstance(value, Mapping) or is_seq(value):
            raise ShapeMismatchError(
                'expected a scalar value, got {}'.format(_describe_shape(value)),
                type_name=owner_type_name,
                path=path)
        try:
            return field.decode_value(value, self._date_policy)
        except FieldValueError as exc:
            raise field.value_error_class(
                str(exc),
                type_name=owner_type_name,
                path=path) from exc

    def _log_ignored_keys(self, entry, value, path):
        declared_names = entry.property_names
        ignored_keys = [key for key in value if key not in declared_names]
        if ignored_keys:
            LOGGER.debug(
                'ignoring key(s) not declared by type %a: %s (at %s)',
                entry.type_name,
                ', '.join(map(ascii, ignored_keys)),
                format_path(path))


def _describe_shape(value):
    if isinstance(value, Mapping):
        return 'an object'
    if is_seq(value):
        return 'an array'
    return 'a scalar ({})'.format(ascii_str(type(value).__qualname__))
