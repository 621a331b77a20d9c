# Copyright (c) 2026 NASK. All rights reserved.

"""
Property descriptors: the *declared types* of properties of mapped
types.

A mapped type declares its properties by defining class attributes
being instances of `Field` subclasses:

* scalar ones: `StringField`, `IntegerField`, `NumberField`,
  `BooleanField`;
* the date/time one: `DateTimeField`;
* the nested-object one: `ObjectField` (referring to a registered
  type, by name or by class);
* the collection one: `ListField` (the type of its elements is
  declared separately -- in the *collection element map* of the owning
  type; see: `objmap.mapped_object.MappedObject.collection_element_types()`).

Fields are data descriptors: when accessed on an instance of the owning
class, a field that has not been set provides `None` (the *zero value*
of any property).
"""

import numbers

from objmap.class_helpers import attr_repr
from objmap.common_helpers import (
    ascii_str,
    str_to_bool,
)
from objmap.const import (
    BOOLEAN_TYPE_ID,
    DATETIME_TYPE_ID,
    INTEGER_TYPE_ID,
    NUMBER_TYPE_ID,
    STRING_TYPE_ID,
)
from objmap.exceptions import (
    DateFormatError,
    FieldValueError,
    TypeCoercionError,
)


SCALAR_KIND = 'scalar'
OBJECT_KIND = 'object'
COLLECTION_KIND = 'collection'



#
# The base field class

class Field(object):

    """
    The base class for all property descriptor (field) classes.

    It has two (overridable/extendable) instance methods:
    `decode_value()` and `encode_value()` (see below).

    Fields can be customized in two ways:

    1) by subclassing (and overriding/extending some of class-level
       attributes and/or methods);

    2) by specifying custom *per-instance* values with keyword
       arguments passed to the constructor -- then corresponding
       class-level attributes are overridden (only names of existing
       class-level attributes are accepted).
    """

    #: One of: `SCALAR_KIND`, `OBJECT_KIND`, `COLLECTION_KIND`
    #: (the decoder and the encoder dispatch on it).
    kind = SCALAR_KIND

    #: The element type identifier corresponding to the field class
    #: (for scalar fields) or `None`.
    type_id = None

    #: The exception class the decoder/encoder raises when the
    #: `decode_value()`/`encode_value()` method raises `FieldValueError`.
    value_error_class = TypeCoercionError

    def __init__(self, **kwargs):
        self._init_kwargs = kwargs
        self._set_per_instance_attrs(kwargs)
        self.name = None

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__qualname__,
            ', '.join(
                '{}={!r}'.format(key, value)
                for key, value in sorted(self._init_kwargs.items())))


    #
    # descriptor protocol

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.__dict__.get(self.name)

    def __set__(self, instance, value):
        instance.__dict__[self.name] = value

    def __delete__(self, instance):
        instance.__dict__.pop(self.name, None)


    #
    # overridable methods

    def decode_value(self, value, date_policy):
        """
        Coerce a scalar taken from an untyped value tree.

        Args:
            `value`:
                A scalar value (never `None`, never a mapping or
                a sequence -- the decoder ensures that).
            `date_policy`:
                The `objmap.datetime_policy.DateConversionPolicy` in
                use (only date/time fields make use of it).

        Returns:
            The coerced value.

        Raises:
            `objmap.exceptions.FieldValueError` if the value cannot be
            coerced.

        The default implementation just passes the value unchanged.
        The method should always return a new object, **never**
        modifying the given value in-place.
        """
        return value

    def encode_value(self, value, date_policy):
        """
        Convert a property value (being not `None`) to a scalar
        that can be placed in an untyped value tree.

        Raises:
            `objmap.exceptions.FieldValueError` if the value does not
            conform to the declared type.

        The default implementation just passes the value unchanged.
        """
        return value


    #
    # non-public internals

    def _set_per_instance_attrs(self, per_instance_attrs):
        # per-instance customizations of class-level attributes
        cls = self.__class__
        for attr_name, obj in per_instance_attrs.items():
            if not hasattr(cls, attr_name) or attr_name.startswith('_'):
                raise TypeError(
                    '{}.__init__() got an unexpected keyword argument {!a}'
                    .format(cls.__qualname__, attr_name))
            setattr(self, attr_name, obj)



#
# Concrete scalar field classes

class StringField(Field):

    """
    For text values.

    `bytes`/`bytearray` input values are accepted if they are UTF-8-decodable.

    >>> f = StringField()
    >>> f.decode_value('Big Al', None)
    'Big Al'
    >>> f.decode_value(b'Tuscaloosa, AL', None)
    'Tuscaloosa, AL'
    >>> f.decode_value(15, None)         # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    objmap.exceptions.FieldValueError: ...
    """

    type_id = STRING_TYPE_ID

    def decode_value(self, value, date_policy):
        value = super(StringField, self).decode_value(value, date_policy)
        if isinstance(value, (bytes, bytearray)):
            try:
                return value.decode('utf-8')
            except UnicodeDecodeError:
                raise FieldValueError(
                    '"{}" is not a valid UTF-8 text'.format(ascii_str(value))) from None
        return self._verified_str(value)

    def encode_value(self, value, date_policy):
        value = super(StringField, self).encode_value(value, date_policy)
        return self._verified_str(value)

    def _verified_str(self, value):
        if not isinstance(value, str):
            raise FieldValueError('{!a} is not a string'.format(value))
        return value


class IntegerField(Field):

    """
    For integer numbers (optionally with min./max. limits defined).

    >>> f = IntegerField()
    >>> f.decode_value(15, None)
    15
    >>> f.decode_value('15', None)
    15
    >>> f.decode_value(15.0, None)
    15
    >>> f.decode_value(15.5, None)       # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    objmap.exceptions.FieldValueError: ...
    >>> f.decode_value(True, None)       # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    objmap.exceptions.FieldValueError: ...

    >>> IntegerField(min_value=0).decode_value(-1, None)  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    objmap.exceptions.FieldValueError: ...
    """

    type_id = INTEGER_TYPE_ID

    min_value = None
    max_value = None

    def decode_value(self, value, date_policy):
        value = super(IntegerField, self).decode_value(value, date_policy)
        value = self._coerce_value(value)
        self._check_range(value)
        return value

    def encode_value(self, value, date_policy):
        value = super(IntegerField, self).encode_value(value, date_policy)
        if isinstance(value, bool) or not isinstance(value, int):
            raise FieldValueError('{!a} is not an integer number'.format(value))
        self._check_range(value)
        return value

    def _coerce_value(self, value):
        if isinstance(value, bool):
            raise FieldValueError(
                '{!a} is a boolean, not an integer number'.format(value))
        try:
            coerced_value = int(value)
            # e.g. float is OK *only* if it is an integer number (such as 42.0)
            if not isinstance(value, str) and coerced_value != value:
                raise ValueError
        except (TypeError, ValueError, OverflowError):
            raise FieldValueError(
                '"{}" cannot be interpreted as an '
                'integer number'.format(ascii_str(value))) from None
        assert isinstance(coerced_value, int)
        return coerced_value

    def _check_range(self, value):
        assert isinstance(value, int)
        if self.min_value is not None and value < self.min_value:
            raise FieldValueError(
                '{} is lesser than {}'.format(value, self.min_value))
        if self.max_value is not None and value > self.max_value:
            raise FieldValueError(
                '{} is greater than {}'.format(value, self.max_value))


class NumberField(Field):

    """
    For any real numbers.

    Numbers given as strings (as produced, e.g., by XML parsers) are
    converted to `int` if they look like integer literals, or to
    `float` otherwise; numbers given as numbers are kept as they are.

    >>> f = NumberField()
    >>> f.decode_value(15, None)
    15
    >>> f.decode_value(2.5, None)
    2.5
    >>> f.decode_value('15', None)
    15
    >>> f.decode_value(' -2.5e3 ', None)
    -2500.0
    >>> f.decode_value('fifteen', None)  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    objmap.exceptions.FieldValueError: ...
    """

    type_id = NUMBER_TYPE_ID

    def decode_value(self, value, date_policy):
        value = super(NumberField, self).decode_value(value, date_policy)
        if isinstance(value, str):
            return self._parse_number(value)
        return self._verified_number(value)

    def encode_value(self, value, date_policy):
        value = super(NumberField, self).encode_value(value, date_policy)
        return self._verified_number(value)

    def _parse_number(self, value):
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            raise FieldValueError(
                '"{}" cannot be interpreted as a number'.format(ascii_str(value))) from None

    def _verified_number(self, value):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise FieldValueError('{!a} is not a number'.format(value))
        return value


class BooleanField(Field):

    """
    For boolean flags.

    Apart from `bool` values, the following input values are accepted:
    `0` and `1`, as well as strings such as `"true"`, `"false"`, `"yes"`,
    `"no"`, `"1"`, `"0"` (case-insensitive).

    >>> f = BooleanField()
    >>> f.decode_value(True, None)
    True
    >>> f.decode_value('false', None)
    False
    >>> f.decode_value(1, None)
    True
    >>> f.decode_value(2, None)          # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    objmap.exceptions.FieldValueError: ...
    """

    type_id = BOOLEAN_TYPE_ID

    def decode_value(self, value, date_policy):
        value = super(BooleanField, self).decode_value(value, date_policy)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                return str_to_bool(value)
            except ValueError as exc:
                raise FieldValueError(str(exc)) from None
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise FieldValueError(
            '{!a} cannot be interpreted as a boolean value'.format(value))

    def encode_value(self, value, date_policy):
        value = super(BooleanField, self).encode_value(value, date_policy)
        if not isinstance(value, bool):
            raise FieldValueError('{!a} is not a boolean value'.format(value))
        return value


class DateTimeField(Field):

    """
    For date-and-time values.

    They are represented in untyped value trees as strings -- formatted
    (and parsed) according to the date conversion policy in use.

    >>> from objmap.datetime_policy import DateConversionPolicy
    >>> policy = DateConversionPolicy('%Y-%m-%d %H:%M:%S', 'UTC')
    >>> f = DateTimeField()
    >>> dt = f.decode_value('2014-05-31 01:02:03', policy)
    >>> dt.replace(tzinfo=None)
    datetime.datetime(2014, 5, 31, 1, 2, 3)
    >>> f.encode_value(dt, policy)
    '2014-05-31 01:02:03'
    >>> f.decode_value('31.05.2014', policy)  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    objmap.exceptions.FieldValueError: ...
    """

    type_id = DATETIME_TYPE_ID
    value_error_class = DateFormatError

    def decode_value(self, value, date_policy):
        value = super(DateTimeField, self).decode_value(value, date_policy)
        if not isinstance(value, str):
            raise FieldValueError(
                '{!a} is not a string (expected date+time '
                'formatted as {!a})'.format(value, date_policy.date_format))
        try:
            return date_policy.parse(value)
        except ValueError:
            raise FieldValueError(
                '"{}" does not match the date+time format {!a}'.format(
                    ascii_str(value),
                    date_policy.date_format)) from None

    def encode_value(self, value, date_policy):
        value = super(DateTimeField, self).encode_value(value, date_policy)
        try:
            return date_policy.format(value)
        except TypeError:
            raise FieldValueError(
                '{!a} is not a datetime.datetime object'.format(value)) from None



#
# Concrete structural field classes

class ObjectField(Field):

    """
    For nested objects of a custom (registered) type.

    Constructor args/kwargs:
        `type_ref` (positional):
            The name of the registered type -- or the registered class
            itself (a name makes it possible to refer to types defined
            later, including the owning type itself).
    """

    kind = OBJECT_KIND

    def __init__(self, type_ref, **kwargs):
        if not isinstance(type_ref, (str, type)):
            raise TypeError(
                '{!a} is neither a type name nor a class'.format(type_ref))
        super(ObjectField, self).__init__(**kwargs)
        self.type_ref = type_ref

    __repr__ = attr_repr('type_ref')

    def decode_value(self, value, date_policy):
        """Always raises `TypeError` (the decoder handles nested objects)."""
        raise TypeError("it's a structural field")

    def encode_value(self, value, date_policy):
        """Always raises `TypeError` (the encoder handles nested objects)."""
        raise TypeError("it's a structural field")


class ListField(Field):

    """
    For homogeneous collections (represented as arrays in untyped value
    trees, as `list` objects in decoded instances).

    The type of elements (a scalar type identifier or a registered type
    name) is declared in the *collection element map* of the owning
    type, under the name of the property.
    """

    kind = COLLECTION_KIND

    def decode_value(self, value, date_policy):
        """Always raises `TypeError` (the decoder handles collections)."""
        raise TypeError("it's a structural field")

    def encode_value(self, value, date_policy):
        """Always raises `TypeError` (the encoder handles collections)."""
        raise TypeError("it's a structural field")



#
# Element fields for collections

SCALAR_TYPE_ID_TO_FIELD_CLASS = {
    field_class.type_id: field_class
    for field_class in (
        StringField,
        IntegerField,
        NumberField,
        BooleanField,
        DateTimeField,
    )}


def make_element_field(element_type_id):
    """
    Make a field object for elements of a collection.

    Args:
        `element_type_id`:
            A scalar type identifier (see: `objmap.const.SCALAR_TYPE_IDS`)
            or the name of a registered custom type.

    Returns:
        An instance of the appropriate scalar field class, or
        an `ObjectField` instance.

    >>> make_element_field('string')
    StringField()
    >>> make_element_field('Person')
    <ObjectField type_ref='Person'>
    """
    field_class = SCALAR_TYPE_ID_TO_FIELD_CLASS.get(element_type_id)
    if field_class is not None:
        return field_class()
    return ObjectField(element_type_id)
