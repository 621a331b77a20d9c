# Copyright (c) 2026 NASK. All rights reserved.

import json

from objmap.config import load_date_conversion_policy
from objmap.const import DEFAULT_MAX_DEPTH
from objmap.decoder import Decoder
from objmap.encoder import Encoder
from objmap.registry import default_registry


__all__ = [
    'ObjectMapper',
]


class ObjectMapper(object):

    """
    A decoder and an encoder sharing the same registry and date
    conversion policy, plus some JSON-related conveniences.

    Constructor args/kwargs: the same as the `objmap.encoder.Encoder`'s
    ones (`registry`, `date_policy`, `omit_unset`, `max_depth`).

    >>> from objmap.fields import DateTimeField, StringField
    >>> from objmap.mapped_object import MappedObject
    >>> from objmap.registry import TypeRegistry
    >>> from objmap.datetime_policy import DateConversionPolicy
    >>> mapper = ObjectMapper(TypeRegistry(), DateConversionPolicy('%Y-%m-%d %H:%M'))
    >>> @mapper.register_class
    ... class Game(MappedObject):
    ...     Opponent = StringField()
    ...     KickOff = DateTimeField()
    ...
    >>> game = mapper.from_json('Game', '{"Opponent": "Auburn", "KickOff": "2013-11-30 15:45"}')
    >>> game.KickOff.hour
    15
    >>> mapper.to_json(game, sort_keys=True)
    '{"KickOff": "2013-11-30 15:45", "Opponent": "Auburn"}'
    """

    def __init__(self, registry=None, date_policy=None, omit_unset=False,
                 max_depth=DEFAULT_MAX_DEPTH):
        if registry is None:
            registry = default_registry
        self.registry = registry
        self.decoder = Decoder(registry, date_policy, max_depth=max_depth)
        self.encoder = Encoder(registry, date_policy, omit_unset=omit_unset,
                               max_depth=max_depth)

    @classmethod
    def from_config(cls, registry=None, config_paths=None, settings=None, **kwargs):
        """
        Make a mapper whose date conversion policy is taken from
        configuration (see: `objmap.config.load_date_conversion_policy()`).
        """
        date_policy = load_date_conversion_policy(config_paths=config_paths,
                                                  settings=settings)
        return cls(registry, date_policy, **kwargs)

    @property
    def date_policy(self):
        return self.decoder.date_policy

    def register_class(self, cls=None, *, type_name=None):
        """Register the class in the mapper's registry (can be used as a decorator)."""
        return self.registry.register_class(cls, type_name=type_name)

    def decode(self, type_name, value):
        return self.decoder.decode(type_name, value)

    def decode_array(self, element_type_name, value):
        return self.decoder.decode_array(element_type_name, value)

    def encode(self, instance):
        return self.encoder.encode(instance)

    def encode_array(self, instances):
        return self.encoder.encode_array(instances)

    def from_json(self, type_name, text):
        return self.decoder.decode_text(type_name, text, parser=json.loads)

    def from_json_array(self, element_type_name, text):
        return self.decoder.decode_array_text(element_type_name, text, parser=json.loads)

    def to_json(self, instance, **json_dumps_kwargs):
        """Encode the instance as a JSON text (kwargs are passed to `json.dumps()`)."""
        return json.dumps(self.encoder.encode(instance), **json_dumps_kwargs)

    def to_json_array(self, instances, **json_dumps_kwargs):
        return json.dumps(self.encoder.encode_array(instances), **json_dumps_kwargs)
