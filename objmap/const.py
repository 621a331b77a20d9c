# Copyright (c) 2026 NASK. All rights reserved.

import os.path as osp


TOPLEVEL_OBJMAP_PACKAGES = 'objmap',


ETC_DIR = '/etc/objmap'
USER_DIR = osp.expanduser('~/.objmap')


# the config section (and the prefix of the corresponding
# settings keys) related to date/time conversions
DATE_CONVERSION_CONFIG_SECTION = 'date_conversion'

DEFAULT_DATE_FORMAT = '%Y-%m-%dT%H:%M:%S.%f'
DEFAULT_TIME_ZONE = 'UTC'


# how many levels of nested objects/collections
# the decoder and the encoder are allowed to descend
DEFAULT_MAX_DEPTH = 100


# element type identifiers that can be used in collection element maps
# to denote scalar elements (see: `objmap.fields.SCALAR_TYPE_ID_TO_FIELD_CLASS`)
STRING_TYPE_ID = 'string'
INTEGER_TYPE_ID = 'integer'
NUMBER_TYPE_ID = 'number'
BOOLEAN_TYPE_ID = 'boolean'
DATETIME_TYPE_ID = 'datetime'

SCALAR_TYPE_IDS = frozenset({
    STRING_TYPE_ID,
    INTEGER_TYPE_ID,
    NUMBER_TYPE_ID,
    BOOLEAN_TYPE_ID,
    DATETIME_TYPE_ID,
})
