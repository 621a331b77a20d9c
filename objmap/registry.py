# Copyright (c) 2026 NASK. All rights reserved.

"""
The type registry: maps type names to *type entries*, i.e., to what is
needed to create (zero-valued) instances of mapped types and to access
their declared properties.

Typically, a type is registered by passing its class to
`TypeRegistry.register_class()` (which can also be used as a class
decorator) -- then the property descriptors are derived, by reflection,
from the `objmap.fields.Field` attributes of the class (see:
`iter_declared_fields()`) and the collection element map is obtained
from its `collection_element_types()` class method (if any).

For types that cannot (or should not) be introspected that way, the
same information can be supplied explicitly -- with
`TypeRegistry.register()`.

After the registration phase is finished, a registry can be *frozen*
(see: `TypeRegistry.freeze()`); all further registration attempts will
fail.  Lookups never mutate a registry, so a registry (whether frozen
or not) can be safely used by many threads concurrently, provided that
no registrations are made concurrently with the lookups.
"""

import functools
import threading
import types
from collections.abc import (
    Iterable,
    Iterator,
    Mapping,
)
from typing import Optional

from objmap.class_helpers import attr_repr
from objmap.common_helpers import ascii_str
from objmap.const import SCALAR_TYPE_IDS
from objmap.exceptions import (
    RegistryFrozenError,
    UnknownTypeError,
)
from objmap.fields import (
    COLLECTION_KIND,
    Field,
)
from objmap.log_helpers import get_logger
from objmap.typing_helpers import (
    CollectionElementMap,
    Constructor,
    TypeRef,
)


__all__ = [
    'PropertyDescriptor',
    'TypeEntry',
    'TypeRegistry',
    'iter_declared_fields',
    'default_registry',
    'register_class',
]


LOGGER = get_logger(__name__)



#
# Property descriptors and type entries

class PropertyDescriptor(object):

    """
    A declared property of a mapped type: its name and its field (the
    latter specifies the declared type of the property).

    The `get()` and `set()` methods provide string-keyed access to the
    property of a given instance.
    """

    __slots__ = ('name', 'field')

    def __init__(self, name: str, field: Field):
        if not isinstance(name, str) or not name:
            raise TypeError('property name {!a} is not a non-empty str'.format(name))
        if not isinstance(field, Field):
            raise TypeError('{!a} (for property {!a}) is not a {} instance'.format(
                field,
                name,
                Field.__qualname__))
        self.name = name
        self.field = field

    __repr__ = attr_repr('name', 'field')

    def get(self, instance):
        return getattr(instance, self.name, None)

    def set(self, instance, value):
        setattr(instance, self.name, value)


class TypeEntry(object):

    """
    Everything the decoder and the encoder need to know about a mapped
    type.  Immutable.

    Attributes:
        `type_name` (`str`):
            The name under which the type is registered.
        `constructor` (a callable):
            Called without arguments, produces a zero-valued instance.
        `properties` (`tuple` of `PropertyDescriptor`):
            The declared properties, in the order of declaration.
        `collection_element_types` (read-only mapping):
            The collection element map: names of collection properties
            mapped to element type identifiers.
    """

    __slots__ = (
        'type_name',
        'constructor',
        'properties',
        'collection_element_types',
    )

    def __init__(self,
                 type_name: str,
                 constructor: Constructor,
                 properties: tuple[PropertyDescriptor, ...],
                 collection_element_types: Mapping[str, str]):
        self.type_name = type_name
        self.constructor = constructor
        self.properties = properties
        self.collection_element_types = types.MappingProxyType(
            dict(collection_element_types))

    __repr__ = attr_repr('type_name', 'constructor')

    @property
    def property_names(self) -> tuple[str, ...]:
        return tuple(prop.name for prop in self.properties)

    def new_instance(self):
        return self.constructor()

    def get_element_type(self, property_name: str) -> Optional[str]:
        return self.collection_element_types.get(property_name)


def iter_declared_fields(cls: type) -> Iterator[tuple[str, Field]]:
    """
    Generate `(<property name>, <field>)` pairs for the given class.

    All `objmap.fields.Field` instances being attributes of the class
    or of any of its base classes are taken into account; the order is
    the order of declaration (with fields of base classes first); a
    field redefined in a subclass keeps its original position, but the
    subclass's field object is used; a field masked in a subclass by a
    non-field attribute is omitted.

    >>> from objmap.fields import IntegerField, StringField
    >>> class Base(object):
    ...     a = StringField()
    ...     b = StringField()
    ...     c = StringField()
    ...
    >>> class Derived(Base):
    ...     d = IntegerField()
    ...     b = IntegerField()
    ...     c = None
    ...
    >>> [(name, type(field).__name__) for name, field in iter_declared_fields(Derived)]
    [('a', 'StringField'), ('b', 'IntegerField'), ('d', 'IntegerField')]
    """
    name_to_field = {}
    for klass in reversed(cls.__mro__):
        for name, obj in vars(klass).items():
            if isinstance(obj, Field):
                name_to_field[name] = obj
            elif name in name_to_field:
                del name_to_field[name]
    yield from name_to_field.items()



#
# The registry

class TypeRegistry(object):

    """
    A registry of mapped types.

    >>> from objmap.fields import ListField, StringField
    >>> registry = TypeRegistry()
    >>> @registry.register_class
    ... class Person(object):
    ...     Name = StringField()
    ...     FavoriteColors = ListField()
    ...
    ...     @classmethod
    ...     def collection_element_types(cls):
    ...         return {'FavoriteColors': 'string'}
    ...
    >>> entry = registry.resolve('Person')
    >>> entry.property_names
    ('Name', 'FavoriteColors')
    >>> entry.get_element_type('FavoriteColors')
    'string'
    >>> registry.resolve_class(Person) is entry
    True
    >>> 'Person' in registry and Person in registry
    True
    >>> registry.resolve('Persona')              # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    objmap.exceptions.UnknownTypeError: ...
    """

    def __init__(self):
        self._name_to_entry = {}
        self._class_to_entry = {}
        self._lock = threading.Lock()
        self._frozen = False

    def __repr__(self):
        return '<{} with {} registered type(s){}>'.format(
            self.__class__.__qualname__,
            len(self._name_to_entry),
            ' (frozen)' if self._frozen else '')

    def __contains__(self, type_ref):
        if isinstance(type_ref, type):
            return type_ref in self._class_to_entry
        return type_ref in self._name_to_entry

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self):
        """Disallow any further registrations."""
        with self._lock:
            self._frozen = True


    #
    # registration

    def register(self,
                 type_name: str,
                 constructor: Constructor,
                 property_descriptors: Iterable,
                 collection_element_types: Optional[CollectionElementMap] = None,
                 *,
                 cls: Optional[type] = None,
                 ) -> TypeEntry:
        """
        Register a type explicitly.

        Args/kwargs:
            `type_name` (`str`):
                The name of the type (must not be one of the scalar
                type identifiers, see: `objmap.const.SCALAR_TYPE_IDS`).
            `constructor` (a callable):
                To be called without arguments to create a zero-valued
                instance (typically, just the class).
            `property_descriptors` (an iterable):
                `PropertyDescriptor` instances or `(<name>, <field>)`
                pairs.
            `collection_element_types` (a mapping or `None`; default: `None`):
                The collection element map.
            `cls` (keyword-only; a class or `None`; default: `None`):
                The *class* of the type's instances, registered so that
                `resolve_class()` (and, therefore, the encoder) will be
                able to find the entry.  `None` means: `constructor` if
                it is a class; otherwise, the class of the object
                returned by `constructor()` (which is called once, at
                registration time, to learn it).

        Returns:
            The new `TypeEntry`.

        Raises:
            `objmap.exceptions.RegistryFrozenError` -- if the registry
            is frozen;
            `TypeError` or `ValueError` -- if any of the arguments is
            not valid (including the case of an already registered
            type name or class).
        """
        entry = self._make_entry(type_name, constructor,
                                 property_descriptors, collection_element_types)
        if cls is None:
            cls = constructor if isinstance(constructor, type) else type(constructor())
        elif not isinstance(cls, type):
            raise TypeError('cls={!a} (given for type {!a}) is not a class'.format(
                cls,
                type_name))
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(
                    'cannot register type {!a} (the registry '
                    'is frozen)'.format(type_name))
            if type_name in self._name_to_entry:
                raise ValueError('type {!a} is already registered'.format(type_name))
            if cls in self._class_to_entry:
                raise ValueError('class {!a} is already registered (as {!a})'.format(
                    cls,
                    self._class_to_entry[cls].type_name))
            self._class_to_entry[cls] = entry
            self._name_to_entry[type_name] = entry
        LOGGER.debug('registered type %a (properties: %s)',
                     type_name, ', '.join(map(ascii, entry.property_names)))
        return entry

    def register_class(self, cls=None, *, type_name=None):
        """
        Register a class, deriving its property descriptors by reflection.

        Args/kwargs:
            `cls` (a class):
                The class to be registered.
            `type_name` (keyword-only; `str` or `None`; default: `None`):
                The name of the type; `None` means: `cls.__name__`.

        Returns:
            `cls` (so that the method can be used as a class decorator).
            If `cls` is omitted, a class decorator is returned (so that
            `@registry.register_class(type_name=...)` is also possible).

        Raises:
            See: `register()`.
        """
        if cls is None:
            return functools.partial(self.register_class, type_name=type_name)
        if not isinstance(cls, type):
            raise TypeError('{!a} is not a class'.format(cls))
        self.register(
            type_name if type_name is not None else cls.__name__,
            cls,
            iter_declared_fields(cls),
            self._get_collection_element_types(cls),
            cls=cls)
        return cls


    #
    # lookups

    def resolve(self, type_name: str) -> TypeEntry:
        """
        Get the entry of the type registered with the given name.

        Raises:
            `objmap.exceptions.UnknownTypeError` if there is no such type.
        """
        try:
            return self._name_to_entry[type_name]
        except (KeyError, TypeError):
            raise UnknownTypeError(
                'no type registered as {!a}'.format(type_name)) from None

    def resolve_class(self, cls: type) -> TypeEntry:
        """
        Get the entry of the type whose class is exactly the given one.

        Raises:
            `objmap.exceptions.UnknownTypeError` if the class has not
            been registered.
        """
        try:
            return self._class_to_entry[cls]
        except (KeyError, TypeError):
            raise UnknownTypeError(
                'class {} is not registered'.format(
                    ascii_str(getattr(cls, '__qualname__', cls)))) from None

    def resolve_ref(self, type_ref: TypeRef) -> TypeEntry:
        """Call `resolve_class()` or `resolve()`, depending on the argument's type."""
        if isinstance(type_ref, type):
            return self.resolve_class(type_ref)
        return self.resolve(type_ref)

    def type_names(self) -> list[str]:
        """Get a sorted list of the names of all registered types."""
        return sorted(self._name_to_entry)


    #
    # non-public internals

    @staticmethod
    def _get_collection_element_types(cls):
        method = getattr(cls, 'collection_element_types', None)
        if method is None:
            return None
        return method()

    def _make_entry(self, type_name, constructor,
                    property_descriptors, collection_element_types):
        if not isinstance(type_name, str) or not type_name:
            raise TypeError('type name {!a} is not a non-empty str'.format(type_name))
        if type_name in SCALAR_TYPE_IDS:
            raise ValueError(
                '{!a} is a reserved (scalar) type identifier, it cannot '
                'be used as the name of a custom type'.format(type_name))
        if not callable(constructor):
            raise TypeError('constructor {!a} (of type {!a}) is not callable'.format(
                constructor,
                type_name))
        properties = tuple(self._iter_property_descriptors(type_name, property_descriptors))
        element_types = self._verified_element_types(type_name, properties,
                                                     collection_element_types)
        return TypeEntry(type_name, constructor, properties, element_types)

    def _iter_property_descriptors(self, type_name, property_descriptors):
        seen_names = set()
        for prop in property_descriptors:
            if not isinstance(prop, PropertyDescriptor):
                try:
                    name, field = prop
                except (TypeError, ValueError):
                    raise TypeError(
                        '{!a} (declared for type {!a}) is neither a property '
                        'descriptor nor a (name, field) pair'.format(
                            prop,
                            type_name)) from None
                prop = PropertyDescriptor(name, field)
            if prop.name in seen_names:
                raise ValueError('duplicate property {!a} declared for type {!a}'.format(
                    prop.name,
                    type_name))
            seen_names.add(prop.name)
            yield prop

    def _verified_element_types(self, type_name, properties, collection_element_types):
        element_types = dict(collection_element_types or {})
        collection_names = {
            prop.name for prop in properties
            if prop.field.kind == COLLECTION_KIND}
        for prop_name, element_type in element_types.items():
            if prop_name not in collection_names:
                raise ValueError(
                    'the collection element map of type {!a} refers to {!a} '
                    'which is not a collection property of that type'.format(
                        type_name,
                        prop_name))
            if not isinstance(element_type, str) or not element_type:
                raise TypeError(
                    'element type {!a} (for property {!a} of type {!a}) '
                    'is not a non-empty str'.format(element_type, prop_name, type_name))
        for prop_name in sorted(collection_names - element_types.keys()):
            LOGGER.warning(
                'the collection property %a of type %a has no element type '
                'declared in the collection element map (decoding of it will '
                'fail unless it is absent from the input data)',
                prop_name, type_name)
        return element_types


default_registry = TypeRegistry()


def register_class(cls=None, *, type_name=None):
    """Register the class in `default_registry` (see: `TypeRegistry.register_class()`)."""
    return default_registry.register_class(cls, type_name=type_name)
