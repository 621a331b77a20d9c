# Copyright (c) 2026 NASK. All rights reserved.

"""
Encoding: instances of registered types to untyped value trees
(ready to be passed, e.g., to `json.dumps()`).
"""

import datetime
import json

from objmap.class_helpers import is_seq
from objmap.common_helpers import ascii_str
from objmap.const import DEFAULT_MAX_DEPTH
from objmap.datetime_policy import DEFAULT_DATE_CONVERSION_POLICY
from objmap.exceptions import (
    FieldValueError,
    NestingTooDeepError,
    ShapeMismatchError,
    TypeCoercionError,
    UnknownTypeError,
)
from objmap.fields import (
    COLLECTION_KIND,
    OBJECT_KIND,
)
from objmap.registry import default_registry
from objmap.typing_helpers import JsonableDict


__all__ = [
    'Encoder',
]


# element values of these types are put into
# untyped arrays as they are (bool is an int)
_PLAIN_SCALAR_TYPES = (str, int, float)


class Encoder(object):

    """
    Encoder of instances of registered types.

    Constructor args/kwargs:
        `registry` (default: `None`):
            The `objmap.registry.TypeRegistry` to resolve classes with;
            `None` means: `objmap.registry.default_registry`.
        `date_policy` (default: `None`):
            The `objmap.datetime_policy.DateConversionPolicy` to format
            date/time values with; `None` means:
            `objmap.datetime_policy.DEFAULT_DATE_CONVERSION_POLICY`.
        `omit_unset` (default: `False`):
            If false, unset (`None`) properties are emitted as `None`
            (JSON null); if true, they are omitted.
        `max_depth` (default: `objmap.const.DEFAULT_MAX_DEPTH`):
            The maximum nesting depth of objects and collections (an
            accidental reference cycle ends with `NestingTooDeepError`).

    >>> from objmap.fields import ListField, StringField
    >>> from objmap.mapped_object import MappedObject
    >>> from objmap.registry import TypeRegistry
    >>> registry = TypeRegistry()
    >>> @registry.register_class
    ... class Person(MappedObject):
    ...     Name = StringField()
    ...     Nickname = StringField()
    ...     FavoriteColors = ListField()
    ...
    ...     @classmethod
    ...     def collection_element_types(cls):
    ...         return {'FavoriteColors': 'string'}
    ...
    >>> person = Person(Name='Jenny', FavoriteColors=['red', 'blue'])
    >>> Encoder(registry).encode(person)
    {'Name': 'Jenny', 'Nickname': None, 'FavoriteColors': ['red', 'blue']}
    >>> Encoder(registry, omit_unset=True).encode(person)
    {'Name': 'Jenny', 'FavoriteColors': ['red', 'blue']}
    """

    def __init__(self, registry=None, date_policy=None, omit_unset=False,
                 max_depth=DEFAULT_MAX_DEPTH):
        if registry is None:
            registry = default_registry
        if date_policy is None:
            date_policy = DEFAULT_DATE_CONVERSION_POLICY
        if not isinstance(max_depth, int) or max_depth < 0:
            raise ValueError('max_depth={!a} is not a non-negative int'.format(max_depth))
        self._registry = registry
        self._date_policy = date_policy
        self._omit_unset = bool(omit_unset)
        self._max_depth = max_depth

    @property
    def registry(self):
        return self._registry

    @property
    def date_policy(self):
        return self._date_policy

    @property
    def omit_unset(self):
        return self._omit_unset

    @property
    def max_depth(self):
        return self._max_depth


    #
    # public interface

    def encode(self, instance) -> JsonableDict:
        """
        Encode the given instance (of a registered class) as a dict.

        Raises:
            `objmap.exceptions.MappingError` (one of its subclasses).
        """
        entry = self._resolve_class(type(instance), owner_type_name=None, path=())
        return self._encode_object(entry, instance, path=(), depth=0)

    def encode_array(self, instances) -> list[JsonableDict]:
        """
        Encode the given instances (each as with `encode()`) as a list.
        """
        if not is_seq(instances):
            raise ShapeMismatchError(
                'expected a sequence of instances, got {!a}'.format(type(instances)))
        result = []
        for i, instance in enumerate(instances):
            entry = self._resolve_class(type(instance), owner_type_name=None, path=(i,))
            result.append(self._encode_object(entry, instance, path=(i,), depth=1))
        return result

    def encode_text(self, instance, serializer=json.dumps):
        """Encode the given instance and serialize (by default, to JSON) the result."""
        return serializer(self.encode(instance))

    def encode_array_text(self, instances, serializer=json.dumps):
        """Like `encode_text()`, but using `encode_array()`."""
        return serializer(self.encode_array(instances))


    #
    # non-public internals

    def _resolve_class(self, cls, owner_type_name, path):
        try:
            return self._registry.resolve_class(cls)
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

    def _encode_object(self, entry, instance, path, depth):
        type_name = entry.type_name
        self._check_depth(type_name, path, depth)
        result = {}
        for prop in entry.properties:
            value = prop.get(instance)
            if value is None:
                if not self._omit_unset:
                    result[prop.name] = None
                continue
            prop_path = path + (prop.name,)
            field = prop.field
            if field.kind == COLLECTION_KIND:
                result[prop.name] = self._encode_collection(type_name, value,
                                                            prop_path, depth + 1)
            elif field.kind == OBJECT_KIND:
                result[prop.name] = self._encode_nested_object(type_name, field, value,
                                                               prop_path, depth + 1)
            else:
                try:
                    result[prop.name] = field.encode_value(value, self._date_policy)
                except FieldValueError as exc:
                    raise field.value_error_class(
                        str(exc),
                        type_name=type_name,
                        path=prop_path) from exc
        return result

    def _encode_nested_object(self, owner_type_name, field, value, path, depth):
        try:
            expected_entry = self._registry.resolve_ref(field.type_ref)
        except UnknownTypeError as exc:
            raise UnknownTypeError(
                exc.msg,
                type_name=owner_type_name,
                path=path) from None
        if type(value) not in self._registry or (
                self._registry.resolve_class(type(value)) is not expected_entry):
            raise TypeCoercionError(
                '{} is not an instance of the type {}'.format(
                    ascii_str(type(value).__qualname__),
                    ascii_str(expected_entry.type_name)),
                type_name=owner_type_name,
                path=path)
        return self._encode_object(expected_entry, value, path, depth)

    def _encode_collection(self, owner_type_name, value, path, depth):
        self._check_depth(owner_type_name, path, depth)
        if not is_seq(value):
            raise ShapeMismatchError(
                'expected a sequence, got {}'.format(ascii_str(type(value).__qualname__)),
                type_name=owner_type_name,
                path=path)
        return [
            self._encode_element(owner_type_name, element, path + (i,), depth + 1)
            for i, element in enumerate(value)]

    def _encode_element(self, owner_type_name, element, path, depth):
        # collection elements are encoded according to their runtime types
        if element is None or isinstance(element, _PLAIN_SCALAR_TYPES):
            return element
        if isinstance(element, datetime.datetime):
            return self._date_policy.format(element)
        if type(element) in self._registry:
            element_entry = self._registry.resolve_class(type(element))
            return self._encode_object(element_entry, element, path, depth)
        raise TypeCoercionError(
            'cannot encode a collection element of type {}'.format(
                ascii_str(type(element).__qualname__)),
            type_name=owner_type_name,
            path=path)
