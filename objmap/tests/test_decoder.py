# Copyright (c) 2026 NASK. All rights reserved.

import datetime
import json
import unittest
from unittest.mock import patch

from unittest_expander import (
    expand,
    foreach,
    param,
)

from objmap.datetime_policy import (
    DEFAULT_DATE_CONVERSION_POLICY,
    DateConversionPolicy,
)
from objmap.decoder import Decoder
from objmap.exceptions import (
    DateFormatError,
    FieldValueError,
    MissingElementTypeMappingError,
    NestingTooDeepError,
    ShapeMismatchError,
    TypeCoercionError,
    UnknownTypeError,
)
from objmap.fields import (
    ListField,
    ObjectField,
    StringField,
)
from objmap.mapped_object import MappedObject
from objmap.registry import (
    TypeRegistry,
    default_registry,
)
from objmap.tests._generic_helpers import (
    TestCaseMixin,
    make_sample_registry,
)


USER_VALUE = {
    'Username': 'Big Al',
    'Password': 'Roll Tide',
    'Color': 'Crimson',
    'Location': 'Tuscaloosa, AL',
    'Championships': 15,
}

PERSON_VALUE = {
    'Name': 'Bill',
    'FavoriteColors': ['Red', 'Blue'],
    'FavoritePeople': [
        {'Name': 'Jenny', 'FavoriteColors': ['Green'], 'FavoritePeople': []},
        {'Name': 'Jimmy'},
    ],
}


class TestDecoder_init(unittest.TestCase):

    def test_defaults(self):
        decoder = Decoder()
        self.assertIs(decoder.registry, default_registry)
        self.assertIs(decoder.date_policy, DEFAULT_DATE_CONVERSION_POLICY)
        self.assertEqual(decoder.max_depth, 100)

    def test_custom(self):
        registry = TypeRegistry()
        policy = DateConversionPolicy('%d.%m.%Y', 'Europe/Warsaw')
        decoder = Decoder(registry, policy, max_depth=3)
        self.assertIs(decoder.registry, registry)
        self.assertIs(decoder.date_policy, policy)
        self.assertEqual(decoder.max_depth, 3)

    def test_illegal_max_depth(self):
        with self.assertRaises(ValueError):
            Decoder(max_depth=-1)
        with self.assertRaises(ValueError):
            Decoder(max_depth='10')


@expand
class TestDecoder_decode(TestCaseMixin, unittest.TestCase):

    def setUp(self):
        self.registry = make_sample_registry()
        self.decoder = Decoder(self.registry)

    def test_flat_object(self):
        user = self.decoder.decode('User', USER_VALUE)
        self.assertIs(type(user), self.registry.resolve('User').constructor)
        self.assertEqual(user.Username, 'Big Al')
        self.assertEqual(user.Password, 'Roll Tide')
        self.assertEqual(user.Color, 'Crimson')
        self.assertEqual(user.Location, 'Tuscaloosa, AL')
        self.assertEqualIncludingTypes(user.Championships, 15)

    def test_type_can_be_given_as_class(self):
        user_class = self.registry.resolve('User').constructor
        user = self.decoder.decode(user_class, USER_VALUE)
        self.assertEqual(user.Username, 'Big Al')

    def test_nested_object(self):
        place = self.decoder.decode('Place', {
            'Name': 'Bryant-Denny Stadium',
            'CreatedByUser': USER_VALUE,
        })
        self.assertEqual(place.Name, 'Bryant-Denny Stadium')
        self.assertEqual(place.CreatedByUser.Username, 'Big Al')
        self.assertEqualIncludingTypes(place.CreatedByUser.Championships, 15)

    def test_collections(self):
        person = self.decoder.decode('Person', PERSON_VALUE)
        self.assertEqual(person.Name, 'Bill')
        self.assertEqualIncludingTypes(person.FavoriteColors, ['Red', 'Blue'])
        self.assertEqual(len(person.FavoritePeople), 2)
        jenny, jimmy = person.FavoritePeople
        self.assertEqual(jenny.Name, 'Jenny')
        self.assertEqual(jenny.FavoriteColors, ['Green'])
        self.assertEqual(jenny.FavoritePeople, [])
        self.assertEqual(jimmy.Name, 'Jimmy')
        self.assertIsNone(jimmy.FavoriteColors)
        self.assertIsNone(jimmy.FavoritePeople)

    def test_collections_are_new_lists(self):
        value = {'FavoriteColors': ('Red', 'Blue')}
        person = self.decoder.decode('Person', value)
        self.assertEqualIncludingTypes(person.FavoriteColors, ['Red', 'Blue'])

    def test_null_collection_elements_are_kept(self):
        person = self.decoder.decode('Person', {
            'FavoriteColors': ['Red', None],
            'FavoritePeople': [None, {'Name': 'Jenny'}],
        })
        self.assertEqual(person.FavoriteColors, ['Red', None])
        self.assertIsNone(person.FavoritePeople[0])
        self.assertEqual(person.FavoritePeople[1].Name, 'Jenny')

    def test_scalar_collections_and_dates(self):
        match = self.decoder.decode('Match', {
            'KickOff': '2013-11-30T15:45:00.000000',
            'Attendance': '101821',
            'Scores': [7, '14', 21.0],
            'Breaks': ['2013-11-30T16:30:00.000000'],
        })
        self.assertEqual(match.KickOff, datetime.datetime(2013, 11, 30, 15, 45,
                                                          tzinfo=datetime.timezone.utc))
        self.assertEqualIncludingTypes(match.Attendance, 101821)
        self.assertEqualIncludingTypes(match.Scores, [7, 14, 21])
        self.assertEqual(match.Breaks, [datetime.datetime(2013, 11, 30, 16, 30,
                                                          tzinfo=datetime.timezone.utc)])

    def test_object_field_referring_by_class(self):
        match = self.decoder.decode('Match', {
            'Venue': {'Name': 'Jordan-Hare Stadium', 'CreatedByUser': {'Username': 'Aubie'}},
        })
        self.assertEqual(match.Venue.Name, 'Jordan-Hare Stadium')
        self.assertEqual(match.Venue.CreatedByUser.Username, 'Aubie')

    def test_missing_keys_give_zero_values(self):
        user = self.decoder.decode('User', {})
        for name in ('Username', 'Password', 'Color', 'Location', 'Championships'):
            self.assertIsNone(getattr(user, name))

    def test_null_values_give_zero_values(self):
        place = self.decoder.decode('Place', {'Name': None, 'CreatedByUser': None})
        self.assertIsNone(place.Name)
        self.assertIsNone(place.CreatedByUser)

    def test_extra_keys_are_ignored_and_logged(self):
        value = dict(USER_VALUE, Mascot='Elephant', username='big al')
        with patch('objmap.decoder.LOGGER') as LOGGER_mock:
            user = self.decoder.decode('User', value)
        self.assertEqual(user.Username, 'Big Al')
        self.assertFalse(hasattr(user, 'Mascot'))
        self.assertEqual(LOGGER_mock.debug.call_count, 1)
        self.assertIn("'Mascot', 'username'", LOGGER_mock.debug.call_args[0])

    def test_keys_are_case_sensitive(self):
        user = self.decoder.decode('User', {'username': 'Big Al'})
        self.assertIsNone(user.Username)

    def test_input_is_not_modified(self):
        value = json.loads(json.dumps(PERSON_VALUE))
        self.decoder.decode('Person', value)
        self.assertEqual(value, PERSON_VALUE)

    def test_each_call_gives_new_instance(self):
        user1 = self.decoder.decode('User', USER_VALUE)
        user2 = self.decoder.decode('User', USER_VALUE)
        self.assertIsNot(user1, user2)
        self.assertEqual(user1, user2)


    # errors

    def test_unknown_type(self):
        with self.assertRaises(UnknownTypeError) as cm:
            self.decoder.decode('Usr', USER_VALUE)
        self.assertMappingError(cm, UnknownTypeError, None, ())

    def test_unknown_nested_type(self):
        @self.registry.register_class
        class Review(MappedObject):
            Author = ObjectField('Critic')

        with self.assertRaises(UnknownTypeError) as cm:
            self.decoder.decode('Review', {'Author': {'Name': 'Roger'}})
        self.assertMappingError(cm, UnknownTypeError, 'Review', ['Author'])

    def test_unknown_element_type(self):
        @self.registry.register_class
        class Review(MappedObject):
            Authors = ListField()

            @classmethod
            def collection_element_types(cls):
                return {'Authors': 'Critic'}

        with self.assertRaises(UnknownTypeError) as cm:
            self.decoder.decode('Review', {'Authors': [{'Name': 'Roger'}]})
        self.assertMappingError(cm, UnknownTypeError, 'Review', ['Authors', 0])

    @foreach(
        param('User', ['Big Al'], ()).label('array for object'),
        param('User', 'Big Al', ()).label('scalar for object'),
        param('User', {'Username': ['Big Al']}, ['Username']).label('array for scalar'),
        param('User', {'Username': {'first': 'Big'}}, ['Username']).label('object for scalar'),
        param('Place', {'CreatedByUser': 'Big Al'}, ['CreatedByUser']).label('scalar for nested'),
        param('Place', {'CreatedByUser': [USER_VALUE]}, ['CreatedByUser']).label('array for nested'),
        param('Person', {'FavoriteColors': 'Red'}, ['FavoriteColors']).label('scalar for array'),
        param('Person', {'FavoriteColors': {'0': 'Red'}}, ['FavoriteColors']).label('object for array'),
        param('Person', {'FavoriteColors': [['Red']]}, ['FavoriteColors', 0]).label('nested array'),
        param('Person', {'FavoritePeople': ['Jenny']}, ['FavoritePeople', 0]).label('scalar element for object'),
        param('Match', {'KickOff': ['2013-11-30T15:45:00.000000']}, ['KickOff']).label('array for date'),
    )
    def test_shape_mismatch(self, type_name, value, expected_path):
        with self.assertRaises(ShapeMismatchError) as cm:
            self.decoder.decode(type_name, value)
        self.assertEqual(cm.exception.path, tuple(expected_path))

    def test_shape_mismatch_deep_path(self):
        value = {'FavoritePeople': [{'Name': 'Jenny'}, {'FavoritePeople': [{'Name': ['Al']}]}]}
        with self.assertRaises(ShapeMismatchError) as cm:
            self.decoder.decode('Person', value)
        self.assertMappingError(cm, ShapeMismatchError, 'Person',
                                ['FavoritePeople', 1, 'FavoritePeople', 0, 'Name'])
        self.assertIn('FavoritePeople[1].FavoritePeople[0].Name', str(cm.exception))

    @foreach(
        param('User', {'Championships': 'fifteen'}, 'User', ['Championships']),
        param('User', {'Username': 15}, 'User', ['Username']),
        param('Place', {'CreatedByUser': {'Championships': True}},
              'User', ['CreatedByUser', 'Championships']),
        param('Person', {'FavoriteColors': ['Red', 42]}, 'Person', ['FavoriteColors', 1]),
        param('Match', {'Attendance': -1}, 'Match', ['Attendance']),
        param('Match', {'Scores': [7, 'seven']}, 'Match', ['Scores', 1]),
    )
    def test_type_coercion_error(self, type_name, value, expected_type_name, expected_path):
        with self.assertRaises(TypeCoercionError) as cm:
            self.decoder.decode(type_name, value)
        self.assertMappingError(cm, TypeCoercionError, expected_type_name, expected_path)
        self.assertIsInstance(cm.exception.__cause__, FieldValueError)

    @foreach(
        param({'KickOff': '30.11.2013 15:45'}, ['KickOff']),
        param({'KickOff': 1385826300}, ['KickOff']),
        param({'Breaks': ['2013-11-30T16:30:00.000000', 'half time']}, ['Breaks', 1]),
    )
    def test_date_format_error(self, value, expected_path):
        with self.assertRaises(DateFormatError) as cm:
            self.decoder.decode('Match', value)
        self.assertMappingError(cm, DateFormatError, 'Match', expected_path)
        self.assertIsInstance(cm.exception.__cause__, FieldValueError)

    def test_missing_element_type_mapping(self):
        @self.registry.register_class
        class Team(MappedObject):
            Name = StringField()
            Players = ListField()

        # absent (or null) collection: no problem
        team = self.decoder.decode('Team', {'Name': 'Crimson Tide'})
        self.assertIsNone(team.Players)
        team = self.decoder.decode('Team', {'Name': 'Crimson Tide', 'Players': None})
        self.assertIsNone(team.Players)

        with self.assertRaises(MissingElementTypeMappingError) as cm:
            self.decoder.decode('Team', {'Name': 'Crimson Tide', 'Players': []})
        self.assertMappingError(cm, MissingElementTypeMappingError, 'Team', ['Players'])


@expand
class TestDecoder_depth_limit(TestCaseMixin, unittest.TestCase):

    def setUp(self):
        self.registry = make_sample_registry()

    @staticmethod
    def _nested_people(levels):
        value = {'Name': 'Leaf'}
        for _ in range(levels):
            value = {'Name': 'Node', 'FavoritePeople': [value]}
        return value

    @foreach(
        # each person level nested in a collection takes 2 depth levels
        param(max_depth=0, levels=0),
        param(max_depth=2, levels=1),
        param(max_depth=10, levels=5),
        param(max_depth=100, levels=50),
    )
    def test_within_limit(self, max_depth, levels):
        decoder = Decoder(self.registry, max_depth=max_depth)
        person = decoder.decode('Person', self._nested_people(levels))
        for _ in range(levels):
            person = person.FavoritePeople[0]
        self.assertEqual(person.Name, 'Leaf')

    @foreach(
        param(max_depth=0, levels=1),
        param(max_depth=1, levels=1),
        param(max_depth=9, levels=5),
        param(max_depth=100, levels=51),
    )
    def test_limit_exceeded(self, max_depth, levels):
        decoder = Decoder(self.registry, max_depth=max_depth)
        with self.assertRaises(NestingTooDeepError) as cm:
            decoder.decode('Person', self._nested_people(levels))
        self.assertEqual(cm.exception.type_name, 'Person')

    def test_very_deep_input_does_not_cause_recursion_error(self):
        decoder = Decoder(self.registry)
        with self.assertRaises(NestingTooDeepError):
            decoder.decode('Person', self._nested_people(5000))

    def test_nested_objects(self):
        decoder = Decoder(self.registry, max_depth=1)
        place = decoder.decode('Place', {'CreatedByUser': {'Username': 'Big Al'}})
        self.assertEqual(place.CreatedByUser.Username, 'Big Al')
        decoder = Decoder(self.registry, max_depth=0)
        with self.assertRaises(NestingTooDeepError) as cm:
            decoder.decode('Place', {'CreatedByUser': {'Username': 'Big Al'}})
        self.assertMappingError(cm, NestingTooDeepError, 'User', ['CreatedByUser'])


class TestDecoder_decode_array(TestCaseMixin, unittest.TestCase):

    def setUp(self):
        self.registry = make_sample_registry()
        self.decoder = Decoder(self.registry)

    def test_ok(self):
        users = self.decoder.decode_array('User', [USER_VALUE, {'Username': 'Aubie'}])
        self.assertEqual(len(users), 2)
        self.assertEqual(users[0].Username, 'Big Al')
        self.assertEqual(users[1].Username, 'Aubie')

    def test_null_element(self):
        with self.assertRaises(ShapeMismatchError) as cm:
            self.decoder.decode_array('User', [USER_VALUE, None])
        self.assertMappingError(cm, ShapeMismatchError, 'User', [1])

    def test_empty(self):
        self.assertEqual(self.decoder.decode_array('User', []), [])

    def test_not_an_array(self):
        with self.assertRaises(ShapeMismatchError) as cm:
            self.decoder.decode_array('User', USER_VALUE)
        self.assertMappingError(cm, ShapeMismatchError, 'User', ())

    def test_element_error_path(self):
        with self.assertRaises(TypeCoercionError) as cm:
            self.decoder.decode_array('User', [USER_VALUE, {'Championships': 'many'}])
        self.assertMappingError(cm, TypeCoercionError, 'User', [1, 'Championships'])

    def test_unknown_type(self):
        with self.assertRaises(UnknownTypeError):
            self.decoder.decode_array('Usr', [])


class TestDecoder_text(unittest.TestCase):

    def setUp(self):
        self.registry = make_sample_registry()
        self.decoder = Decoder(self.registry)

    def test_decode_text(self):
        person = self.decoder.decode_text('Person', json.dumps(PERSON_VALUE))
        self.assertEqual(person.FavoritePeople[0].Name, 'Jenny')
        self.assertEqual(len(person.FavoriteColors), 2)

    def test_decode_array_text(self):
        users = self.decoder.decode_array_text('User', json.dumps([USER_VALUE]))
        self.assertEqual(users[0].Championships, 15)

    def test_custom_parser(self):
        calls = []

        def parser(text):
            calls.append(text)
            return {'Username': text.upper()}

        user = self.decoder.decode_text('User', 'big al', parser=parser)
        self.assertEqual(calls, ['big al'])
        self.assertEqual(user.Username, 'BIG AL')

    def test_parser_errors_propagate(self):
        with self.assertRaises(json.JSONDecodeError):
            self.decoder.decode_text('User', '{"Username": ')
