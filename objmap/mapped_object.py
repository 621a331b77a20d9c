# Copyright (c) 2026 NASK. All rights reserved.

from objmap.common_helpers import ascii_str
from objmap.registry import iter_declared_fields


__all__ = [
    'MappedObject',
]


class MappedObject(object):

    """
    A convenience base class for mapped types.

    Declared properties are `objmap.fields.Field` class attributes; each
    of them provides `None` until set.  The constructor accepts the
    declared properties as keyword arguments.

    >>> from objmap.fields import IntegerField, ListField, StringField
    >>> class User(MappedObject):
    ...     Username = StringField()
    ...     Championships = IntegerField()
    ...     Colors = ListField()
    ...
    ...     @classmethod
    ...     def collection_element_types(cls):
    ...         return {'Colors': 'string'}
    ...
    >>> u = User(Username='Big Al')
    >>> u.Username
    'Big Al'
    >>> u.Championships is None
    True
    >>> u
    <User Username='Big Al', Championships=None, Colors=None>
    >>> u == User(Username='Big Al', Championships=None)
    True
    >>> u == User(Username='Big Al', Championships=15)
    False
    >>> User(username='Big Al')              # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    """

    __hash__ = None

    def __init__(self, **kwargs):
        declared_names = set(self.declared_property_names())
        for name, value in kwargs.items():
            if name not in declared_names:
                raise TypeError('{}.__init__() got an unexpected keyword argument {!a}'.format(
                    self.__class__.__qualname__,
                    name))
            setattr(self, name, value)

    @classmethod
    def collection_element_types(cls):
        """
        Get the collection element map of the type.

        To be overridden in subclasses that declare any `ListField`
        properties.  The returned mapping should map names of such
        properties to element type identifiers: scalar type identifiers
        (`'string'`, `'integer'`, `'number'`, `'boolean'`, `'datetime'`)
        or names of registered types.

        The method is called (once) when the class is being registered;
        its result should depend only on the class.

        The default implementation returns an empty dict.
        """
        return {}

    @classmethod
    def declared_property_names(cls):
        return [name for name, _ in iter_declared_fields(cls)]

    def declared_property_values(self):
        """Get a dict that maps declared property names to their values."""
        return {name: getattr(self, name)
                for name in self.declared_property_names()}

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.declared_property_values() == other.declared_property_values()

    def __repr__(self):
        return '<{} {}>'.format(
            ascii_str(self.__class__.__qualname__),
            ', '.join('{}={!r}'.format(name, value)
                      for name, value in self.declared_property_values().items()))
