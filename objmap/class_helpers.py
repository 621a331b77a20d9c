# Copyright (c) 2026 NASK. All rights reserved.

from collections.abc import Sequence


def attr_repr(*attr_names):
    """
    Make a __repr__() implementation based on given attribute names.

    Any number of positional args:
        Names of instance attributes and/or class attributes.

    Returns:
        A function being the requested __repr__() implementation.

    >>> class A(object):
    ...    __repr__ = attr_repr('x', 'y')
    ...    x = 1
    ...    def __init__(self):
    ...        self.y = 'qwerty'
    >>> a = A()
    >>> a
    <A x=1, y='qwerty'>
    """
    format_repr = ('<{0.__class__.__qualname__} ' +
                   ', '.join('%s={0.%s!r}' % (name, name)
                             for name in attr_names) +
                   '>').format
    format_repr_fallback = object.__repr__

    def __repr__(self):
        # noinspection PyBroadException
        try:
            return format_repr(self)
        except Exception:
            return format_repr_fallback(self)

    return __repr__


def is_seq(obj):
    """
    Check if the object is a sequence but *not* a str/bytes/bytearray/memoryview.

    >>> is_seq(['Red', 'Blue'])
    True
    >>> is_seq(('Red',))
    True
    >>> is_seq([])
    True
    >>> is_seq('Red')
    False
    >>> is_seq(b'Red')
    False
    >>> is_seq(bytearray(b'Red'))
    False
    >>> is_seq({'Name': 'Billy'})
    False
    >>> is_seq({'Red', 'Blue'})
    False
    >>> is_seq(42)
    False
    """
    return (isinstance(obj, Sequence) and
            not isinstance(obj, (str, bytes, bytearray, memoryview)))
