# Copyright (c) 2026 NASK. All rights reserved.

from objmap.typing_helpers import Path


def ascii_str(obj):

    r"""
    Safely convert the given object to an ASCII-only `str`.

    This function does its best to obtain a string representation
    (possibly `str`-like or `bytes`-like converted to `str`, though
    `repr()` can also be used as the last-resort fallback) and then
    escapes any non-ASCII characters -- *not raising* any encoding or
    decoding exceptions.

    >>> ascii_str('')
    ''
    >>> ascii_str('Big Al')
    'Big Al'
    >>> ascii_str(b'Big Al')
    'Big Al'
    >>> ascii_str('Ech, ale błąd!')
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(b'Ech, ale b\xc5\x82\xc4\x85d!')
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(b'\xee\xdd ja\xc5\xba\xc5\x84')
    '\\udcee\\udcdd ja\\u017a\\u0144'
    >>> ascii_str(ValueError('Ech, ale błąd!'))
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(42)
    '42'

    >>> class Nasty(object):
    ...     def __str__(self): raise ValueError
    ...     def __repr__(self): return 'quite nasŧy'
    ...
    >>> ascii_str(Nasty())
    'quite nas\\u0167y'
    """
    if isinstance(obj, str):
        s = obj
    else:
        if isinstance(obj, memoryview):
            obj = bytes(obj)
        if isinstance(obj, (bytes, bytearray)):
            s = obj.decode('utf-8', 'surrogateescape')
        else:
            try:
                s = str(obj)
            except ValueError:
                s = repr(obj)
    return s.encode('ascii', 'backslashreplace').decode('ascii')


def str_to_bool(s):
    """
    Return True or False, given one of the known strings (see examples below).

    >>> str_to_bool('1')
    True
    >>> str_to_bool('yes')
    True
    >>> str_to_bool('True')  # note: checks are case-insensitive
    True
    >>> str_to_bool('on')
    True

    >>> str_to_bool('0')
    False
    >>> str_to_bool('nO')
    False
    >>> str_to_bool('false')
    False
    >>> str_to_bool('off')
    False

    Other string values cause ValueError:

    >>> str_to_bool('unknown')        # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...

    Non-str values cause TypeError:

    >>> str_to_bool(1)                # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    """
    if not isinstance(s, str):
        raise TypeError('{!a} is not a str'.format(s))
    try:
        return str_to_bool.LOWERCASE_TO_BOOL[s.lower()]
    except KeyError:
        raise ValueError('"{}" is not a valid YES/NO flag'.format(ascii_str(s))) from None

str_to_bool.LOWERCASE_TO_BOOL = {
    '1': True,
    'y': True,
    'yes': True,
    't': True,
    'true': True,
    'on': True,

    '0': False,
    'n': False,
    'no': False,
    'f': False,
    'false': False,
    'off': False,
}


def format_path(path: Path) -> str:
    """
    Render the path of a value within an untyped value tree.

    >>> format_path(())
    '<root>'
    >>> format_path(('CreatedByUser', 'Username'))
    'CreatedByUser.Username'
    >>> format_path(('FavoritePeople', 0, 'FavoriteColors', 1))
    'FavoritePeople[0].FavoriteColors[1]'
    >>> format_path((3, 'Name'))
    '[3].Name'
    """
    if not path:
        return '<root>'
    parts = []
    for segment in path:
        if isinstance(segment, int):
            parts.append('[{}]'.format(segment))
        else:
            if parts:
                parts.append('.')
            parts.append(ascii_str(segment))
    return ''.join(parts)
