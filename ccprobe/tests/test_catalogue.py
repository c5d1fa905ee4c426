#!/usr/bin/env python3
"""
Unit tests for the probe catalogue and descriptor variants.
"""

import unittest

from ccprobe.catalogue import (
    Attribute,
    Builtin,
    Catalogue,
    Language,
    StandardFlag,
    WarningFlag,
    WrapMode,
    applies_to,
    default_catalogue,
    describe,
    scope_of,
)
from ccprobe.errors import CatalogueError
from ccprobe.tests.helpers import C, C11, C99, CXX, CXX17, WALL, WERROR, WSTRICT, small_catalogue


class TestDescriptors(unittest.TestCase):
    """Descriptor construction and classification"""

    def test_flags(self) -> None:
        self.assertEqual(StandardFlag("c++17", CXX).flag, "-std=c++17")
        self.assertEqual(WarningFlag("format=2").flag, "-Wformat=2")

    def test_default_wrap_modes(self) -> None:
        self.assertIs(Attribute("unused", ("int x;",)).mode, WrapMode.DECLARATION)
        self.assertIs(Builtin("expect", ("(void)0;",)).mode, WrapMode.STATEMENT)

    def test_missing_discriminator_is_a_defect(self) -> None:
        with self.assertRaises(CatalogueError):
            Attribute("", ("int x;",))
        with self.assertRaises(CatalogueError):
            Builtin("expect", ())
        with self.assertRaises(CatalogueError):
            StandardFlag("", C)
        with self.assertRaises(CatalogueError):
            WarningFlag("")

    def test_scope(self) -> None:
        self.assertIsNone(scope_of(WALL))
        self.assertIs(scope_of(WSTRICT), C)
        self.assertIs(scope_of(CXX17), CXX)
        self.assertTrue(applies_to(WALL, CXX))
        self.assertTrue(applies_to(WSTRICT, C))
        self.assertFalse(applies_to(WSTRICT, CXX))

    def test_unknown_descriptor(self) -> None:
        with self.assertRaises(CatalogueError):
            scope_of("-Wall")  # type: ignore[arg-type]
        with self.assertRaises(CatalogueError):
            describe(42)  # type: ignore[arg-type]

    def test_describe(self) -> None:
        self.assertEqual(describe(Attribute("packed", ("x;",))), "__attribute__((packed))")
        self.assertEqual(describe(Builtin("expect", ("x;",))), "__builtin_expect")
        self.assertEqual(describe(WSTRICT), "-Wstrict-prototypes")


class TestCatalogue(unittest.TestCase):
    """Catalogue validation and lookups"""

    def test_descriptor_order(self) -> None:
        catalogue = small_catalogue()
        self.assertEqual(
            catalogue.descriptors, catalogue.features + catalogue.options
        )

    def test_standards_keep_catalogue_order(self) -> None:
        catalogue = small_catalogue()
        self.assertEqual(catalogue.standards(C), [C11, C99])
        self.assertEqual(catalogue.standards(CXX), [CXX17])

    def test_warnings_exclude_fatal(self) -> None:
        warnings = small_catalogue().warnings()
        self.assertNotIn(WERROR, warnings)
        self.assertEqual(warnings[0], WALL)

    def test_fatal_warning_must_be_an_option(self) -> None:
        with self.assertRaises(CatalogueError):
            Catalogue(languages=(C,), features=(), options=(WALL,))

    def test_duplicates_rejected(self) -> None:
        with self.assertRaises(CatalogueError):
            Catalogue(languages=(C,), features=(), options=(WALL, WALL, WERROR))
        with self.assertRaises(CatalogueError):
            Catalogue(languages=(C, C), features=(), options=(WERROR,))

    def test_misplaced_variants_rejected(self) -> None:
        with self.assertRaises(CatalogueError):
            Catalogue(languages=(C,), features=(WALL,), options=(WERROR,))  # type: ignore[arg-type]

    def test_default_catalogue(self) -> None:
        catalogue = default_catalogue()
        self.assertEqual(catalogue.languages, (Language.C, Language.CXX))
        self.assertIn(catalogue.fatal_warning, catalogue.options)
        self.assertTrue(catalogue.standards(Language.C))
        self.assertTrue(catalogue.standards(Language.CXX))
        kinds = {d.kind for d in catalogue.descriptors}
        self.assertEqual(kinds, {"attribute", "builtin", "standard", "warning"})
        # Independent catalogue values must not share state
        self.assertEqual(default_catalogue(), catalogue)

    def test_language_lookup(self) -> None:
        self.assertIs(Language.from_label("C++"), Language.CXX)
        with self.assertRaises(ValueError):
            Language.from_label("fortran")


if __name__ == "__main__":
    unittest.main()
