# Copyright (c) 2026 NASK. All rights reserved.

"""
*objmap*: mapping between untyped value trees (such as those produced
by JSON parsers) and graphs of instances of user-declared types.
"""

from objmap.config import (
    ConfigError,
    load_date_conversion_policy,
)
from objmap.datetime_policy import (
    DEFAULT_DATE_CONVERSION_POLICY,
    DateConversionPolicy,
)
from objmap.decoder import Decoder
from objmap.encoder import Encoder
from objmap.exceptions import (
    DateFormatError,
    FieldValueError,
    MappingError,
    MissingElementTypeMappingError,
    NestingTooDeepError,
    RegistryFrozenError,
    ShapeMismatchError,
    TypeCoercionError,
    UnknownTypeError,
)
from objmap.fields import (
    BooleanField,
    DateTimeField,
    Field,
    IntegerField,
    ListField,
    NumberField,
    ObjectField,
    StringField,
)
from objmap.mapped_object import MappedObject
from objmap.mapper import ObjectMapper
from objmap.registry import (
    PropertyDescriptor,
    TypeEntry,
    TypeRegistry,
    default_registry,
    register_class,
)
