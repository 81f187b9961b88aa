import unittest

import jsonrelay


class TestVersion(unittest.TestCase):
    def test_version(self):
        version = jsonrelay.__version__
        self.assertTrue(version.startswith("0"))
