# Copyright (c) 2026 NASK. All rights reserved.

from collections.abc import (
    Callable,
    Mapping,
)
from typing import (
    Any,
    Union,
)


# The *untyped value tree* -- i.e., what a JSON/XML parser produces
# and what a serializer consumes.
Jsonable = Union['JsonableScalar', 'JsonableCollection']
JsonableScalar = Union[str, int, float, bool, None]
JsonableDict = dict[str, Jsonable]
JsonableSeq = Union[list[Jsonable], tuple[Jsonable, ...]]
JsonableCollection = Union[JsonableDict, JsonableSeq]

TypeRef = Union[str, type]  # a registered type name or a registered class

Constructor = Callable[[], Any]
CollectionElementMap = Mapping[str, str]

# the path of a value within an untyped value tree
PathSegment = Union[str, int]
Path = tuple[PathSegment, ...]
