#!/usr/bin/env python3
"""
Unit tests for the probe outcome table.
"""

import unittest

from ccprobe.catalogue import WarningFlag
from ccprobe.render import render_fragment, render_header
from ccprobe.results import ProbeResults
from ccprobe.tests.helpers import C, CXX, PACKED, WALL, WSTRICT, small_catalogue


class TestProbeResults(unittest.TestCase):
    """Outcome recording"""

    def setUp(self) -> None:
        self.results = ProbeResults(small_catalogue())

    def test_language_order_follows_catalogue(self) -> None:
        self.results.record(PACKED, [CXX, C])
        self.assertEqual(self.results.outcome(PACKED), (C, CXX))
        self.assertTrue(self.results.succeeded(PACKED, CXX))

    def test_write_once(self) -> None:
        self.results.record(WALL, [C])
        with self.assertRaises(ValueError):
            self.results.record(WALL, [C, CXX])

    def test_scoped_outcome_cannot_leave_its_language(self) -> None:
        with self.assertRaises(ValueError):
            self.results.record(WSTRICT, [C, CXX])
        self.results.record(WSTRICT, [C])
        self.assertFalse(self.results.succeeded(WSTRICT, CXX))

    def test_unknown_descriptor(self) -> None:
        with self.assertRaises(KeyError):
            self.results.record(WarningFlag("unlisted"), [C])
        with self.assertRaises(KeyError):
            self.results.outcome(WALL)

    def test_completeness(self) -> None:
        catalogue = self.results.catalogue
        self.assertEqual(self.results.missing(), list(catalogue.descriptors))
        for descriptor in catalogue.descriptors:
            self.results.record(descriptor, [])
        self.assertTrue(self.results.complete)
        self.results.require_complete()

    def test_incomplete_results_cannot_be_rendered(self) -> None:
        self.results.record(PACKED, [C])
        with self.assertRaises(ValueError):
            self.results.require_complete()
        with self.assertRaises(ValueError):
            render_header(self.results.catalogue, self.results)
        with self.assertRaises(ValueError):
            render_fragment(self.results.catalogue, self.results)


if __name__ == "__main__":
    unittest.main()
