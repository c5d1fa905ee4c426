#!/usr/bin/env python3
"""
Unit tests for identifier and file name derivation.
"""

import unittest

from ccprobe.catalogue import StandardFlag, default_catalogue
from ccprobe.naming import (
    guard_name,
    macro_name,
    sanitize,
    source_name,
    standard_variable,
    stem,
    strictness_variable,
)
from ccprobe.tests.helpers import C, CXX, CXX17, EXPECT, PACKED, WALL, WSTRICT


class TestSanitize(unittest.TestCase):
    """Flag sanitizing"""

    def test_runs_collapse_and_leading_separators_drop(self) -> None:
        self.assertEqual(sanitize("-Wstrict-prototypes"), "Wstrict_prototypes")
        self.assertEqual(sanitize("--a--b"), "a_b")
        self.assertEqual(sanitize("-Wformat=2"), "Wformat_2")

    def test_plusplus_stays_distinguishable(self) -> None:
        self.assertEqual(sanitize("-std=c++17"), "std_cplusplus17")
        self.assertNotEqual(sanitize("-std=c++17"), sanitize("-std=c17"))

    def test_default_catalogue_stems_are_unique(self) -> None:
        stems = [stem(d) for d in default_catalogue().descriptors]
        self.assertEqual(len(stems), len(set(stems)))


class TestNames(unittest.TestCase):
    """Fixture, macro and variable names"""

    def test_fixture_names(self) -> None:
        self.assertEqual(source_name(PACKED, C), "attribute_packed.c")
        self.assertEqual(source_name(EXPECT, CXX), "builtin_expect.cpp")
        self.assertEqual(source_name(CXX17, CXX), "std_cplusplus17.cpp")
        self.assertEqual(source_name(WALL, C), "Wall.c")

    def test_feature_macros(self) -> None:
        self.assertEqual(macro_name(PACKED, C), "HAVE_C_ATTRIBUTE_PACKED")
        self.assertEqual(macro_name(EXPECT, CXX), "HAVE_CXX_BUILTIN_EXPECT")

    def test_option_macros(self) -> None:
        self.assertEqual(macro_name(WALL, C), "HAVE_COMPILER_FLAG_C_WALL")
        self.assertEqual(
            macro_name(WSTRICT, CXX), "HAVE_COMPILER_FLAG_CXX_WSTRICT_PROTOTYPES"
        )
        self.assertEqual(
            macro_name(StandardFlag("c++17", CXX), CXX),
            "HAVE_COMPILER_FLAG_CXX_STD_CPLUSPLUS17",
        )

    def test_variables(self) -> None:
        self.assertEqual(guard_name("my-lib"), "INC_MY_LIB_GENERATED")
        self.assertEqual(standard_variable(C), "CFLAGS_STANDARD")
        self.assertEqual(strictness_variable(CXX), "CXXFLAGS_STRICTNESS")


if __name__ == "__main__":
    unittest.main()
