# Copyright (c) 2026 NASK. All rights reserved.

import doctest
import importlib
import unittest

from unittest_expander import (
    expand,
    foreach,
)


MODULES_WITH_DOCTESTS = [
    'objmap.class_helpers',
    'objmap.common_helpers',
    'objmap.config',
    'objmap.datetime_policy',
    'objmap.decoder',
    'objmap.encoder',
    'objmap.exceptions',
    'objmap.fields',
    'objmap.mapped_object',
    'objmap.mapper',
    'objmap.registry',
]


@expand
class TestDoctests(unittest.TestCase):

    @foreach(MODULES_WITH_DOCTESTS)
    def test(self, module_name):
        module = importlib.import_module(module_name)
        failure_count, test_count = doctest.testmod(module)
        self.assertGreater(test_count, 0)
        self.assertEqual(failure_count, 0)
