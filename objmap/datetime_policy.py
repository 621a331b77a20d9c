# Copyright (c) 2026 NASK. All rights reserved.

"""
The *date conversion policy*: how date/time values are represented
as text in untyped value trees.

A `DateConversionPolicy` is immutable; the same instance should be
passed to the decoder and the encoder, so that date/time values are
converted symmetrically (see: `objmap.decoder.Decoder` and
`objmap.encoder.Encoder`; see also `objmap.config` -- about obtaining
a policy from configuration files).
"""

import dataclasses
import datetime

from dateutil.tz import gettz

from objmap.const import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_TIME_ZONE,
)


__all__ = [
    'DateConversionPolicy',
    'DEFAULT_DATE_CONVERSION_POLICY',
]


@dataclasses.dataclass(frozen=True)
class DateConversionPolicy:

    """
    A date/time text format + a time zone.

    Constructor args/kwargs:
        `date_format` (default: `objmap.const.DEFAULT_DATE_FORMAT`):
            A `datetime.strptime()`/`strftime()`-compatible format.
        `time_zone` (default: `objmap.const.DEFAULT_TIME_ZONE`):
            A time zone identifier accepted by `dateutil.tz.gettz()`,
            e.g., `'UTC'` or `'Europe/Warsaw'`.

    Raises:
        `TypeError` if any of the arguments is not a `str`;
        `ValueError` if any of them is empty or the time zone is unknown.

    >>> policy = DateConversionPolicy()
    >>> policy
    DateConversionPolicy(date_format='%Y-%m-%dT%H:%M:%S.%f', time_zone='UTC')
    >>> dt = policy.parse('2014-05-31T01:02:03.456')
    >>> dt.replace(tzinfo=None)
    datetime.datetime(2014, 5, 31, 1, 2, 3, 456000)
    >>> dt.utcoffset()
    datetime.timedelta(0)
    >>> policy.format(dt)
    '2014-05-31T01:02:03.456000'
    >>> policy.parse(policy.format(dt)) == dt
    True

    Naive date/time values are interpreted as expressed in the policy's
    time zone; aware ones are converted to that zone:

    >>> warsaw_policy = DateConversionPolicy('%Y-%m-%d %H:%M', 'Europe/Warsaw')
    >>> utc_dt = datetime.datetime(2014, 5, 30, 23, 2, tzinfo=datetime.timezone.utc)
    >>> warsaw_policy.format(utc_dt)
    '2014-05-31 01:02'
    >>> warsaw_policy.parse('2014-05-31 01:02') == utc_dt
    True
    >>> warsaw_policy.format(datetime.datetime(2014, 5, 31, 1, 2))
    '2014-05-31 01:02'

    Note that `parse(format(dt)) == dt` holds only for `dt` that the
    format can represent.  In particular, when the format has no UTC
    offset directive (`%z`), the two occurrences of a wall-clock time
    repeated at the end of DST are indistinguishable, and the text is
    always parsed as the earlier (DST) one:

    >>> second_0230 = datetime.datetime(2013, 10, 27, 1, 30, tzinfo=datetime.timezone.utc)
    >>> warsaw_policy.format(second_0230)
    '2013-10-27 02:30'
    >>> warsaw_policy.parse('2013-10-27 02:30').astimezone(datetime.timezone.utc)
    datetime.datetime(2013, 10, 27, 0, 30, tzinfo=datetime.timezone.utc)

    >>> DateConversionPolicy(time_zone='No/Such_Zone')  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    """

    date_format: str = DEFAULT_DATE_FORMAT
    time_zone: str = DEFAULT_TIME_ZONE
    tzinfo: datetime.tzinfo = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for name in ('date_format', 'time_zone'):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError('{}={!a} is not a str'.format(name, value))
            if not value.strip():
                raise ValueError('{} must not be empty'.format(name))
        tzinfo = gettz(self.time_zone)
        if tzinfo is None:
            raise ValueError('unknown time zone: {!a}'.format(self.time_zone))
        # (the dataclass is frozen, so this is the only way to set it)
        object.__setattr__(self, 'tzinfo', tzinfo)

    def parse(self, text):
        """
        Parse the given text according to the policy's format.

        Args:
            `text`: a `str`.

        Returns:
            A *timezone-aware* `datetime.datetime` (expressed in the
            policy's time zone).

        Raises:
            `TypeError` if `text` is not a `str`;
            `ValueError` if it does not match the format.
        """
        if not isinstance(text, str):
            raise TypeError('{!a} is not a str'.format(text))
        dt = datetime.datetime.strptime(text, self.date_format)
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.tzinfo)
        return dt.astimezone(self.tzinfo)

    def format(self, dt):
        """
        Format the given date+time according to the policy's format.

        Args:
            `dt`: a `datetime.datetime` (naive or timezone-aware).

        Returns:
            A `str`.

        Raises:
            `TypeError` if `dt` is not a `datetime.datetime`.
        """
        if not isinstance(dt, datetime.datetime):
            raise TypeError('{!a} is not a datetime.datetime'.format(dt))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=self.tzinfo)
        else:
            dt = dt.astimezone(self.tzinfo)
        return dt.strftime(self.date_format)


DEFAULT_DATE_CONVERSION_POLICY = DateConversionPolicy()
