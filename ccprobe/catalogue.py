#!/usr/bin/env python3
"""
Probe catalogue: source languages, descriptor variants and the built-in list.

Every probe ccprobe runs is described by one of four descriptor classes:

- Attribute: a ``__attribute__((...))`` construct compiled into a fixture
- Builtin: a ``__builtin_*`` construct compiled into a fixture
- StandardFlag: a ``-std=`` choice, always scoped to one language
- WarningFlag: a ``-W`` switch, optionally scoped to one language

A Catalogue is an immutable value bundling the languages to probe with the
ordered features and options. It is passed explicitly through the pipeline,
so tests can build as many small catalogues as they like.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, NoReturn, Optional, Union

from ccprobe.errors import CatalogueError


class Language(Enum):
    """Source languages a compiler can be probed for."""

    C = ("c", "C", "CFLAGS", ".c", "cc")
    CXX = ("c++", "CXX", "CXXFLAGS", ".cpp", "c++")

    def __init__(
        self,
        label: str,
        tag: str,
        variable_prefix: str,
        suffix: str,
        default_compiler: str,
    ):
        self.label = label  # Human readable name ("c", "c++")
        self.tag = tag  # Macro qualifier (HAVE_<tag>_...)
        self.variable_prefix = variable_prefix  # Make variable prefix
        self.suffix = suffix  # Fixture file suffix
        self.default_compiler = default_compiler

    @classmethod
    def from_label(cls, label: str) -> "Language":
        for language in cls:
            if language.label == label.lower():
                return language
        raise ValueError(f"Unknown language: {label}")


class WrapMode(Enum):
    """Where a snippet body lands inside the fixture template."""

    STATEMENT = "statement"  # Inside main()
    DECLARATION = "declaration"  # At file scope, before main()
    TRIVIAL = "trivial"  # No body at all, used by flag probes


@dataclass(frozen=True)
class Attribute:
    """An ``__attribute__((name))`` feature."""

    name: str
    body: tuple[str, ...]
    mode: WrapMode = WrapMode.DECLARATION

    kind: ClassVar[str] = "attribute"

    def __post_init__(self) -> None:
        _require(self.name, "attribute without a name")
        _require(self.body, f"attribute {self.name!r} without a snippet")


@dataclass(frozen=True)
class Builtin:
    """A ``__builtin_name`` feature."""

    name: str
    body: tuple[str, ...]
    mode: WrapMode = WrapMode.STATEMENT

    kind: ClassVar[str] = "builtin"

    def __post_init__(self) -> None:
        _require(self.name, "builtin without a name")
        _require(self.body, f"builtin {self.name!r} without a snippet")


@dataclass(frozen=True)
class StandardFlag:
    """A language standard selected with ``-std=<identifier>``."""

    identifier: str
    language: Language

    kind: ClassVar[str] = "standard"

    def __post_init__(self) -> None:
        _require(self.identifier, "standard without an identifier")

    @property
    def flag(self) -> str:
        return f"-std={self.identifier}"


@dataclass(frozen=True)
class WarningFlag:
    """A warning switch ``-W<name>``; ``language`` limits it to one language."""

    name: str
    language: Optional[Language] = None

    kind: ClassVar[str] = "warning"

    def __post_init__(self) -> None:
        _require(self.name, "warning without a name")

    @property
    def flag(self) -> str:
        return f"-W{self.name}"


Feature = Union[Attribute, Builtin]
Option = Union[StandardFlag, WarningFlag]
Descriptor = Union[Attribute, Builtin, StandardFlag, WarningFlag]


def _require(value: object, message: str) -> None:
    if not value:
        raise CatalogueError(message)


def unknown_descriptor(descriptor: object) -> NoReturn:
    """Raise for a value that is not one of the four descriptor classes."""
    raise CatalogueError(f"Unknown descriptor: {descriptor!r}")


def scope_of(descriptor: Descriptor) -> Optional[Language]:
    """Return the single language a descriptor is limited to, if any."""
    match descriptor:
        case Attribute() | Builtin():
            return None
        case StandardFlag(language=language):
            return language
        case WarningFlag(language=language):
            return language
        case _:
            unknown_descriptor(descriptor)


def applies_to(descriptor: Descriptor, language: Language) -> bool:
    scope = scope_of(descriptor)
    return scope is None or scope is language


def describe(descriptor: Descriptor) -> str:
    """Short human readable description used in progress lines and listings."""
    match descriptor:
        case Attribute(name=name):
            return f"__attribute__(({name}))"
        case Builtin(name=name):
            return f"__builtin_{name}"
        case StandardFlag() | WarningFlag():
            return descriptor.flag
        case _:
            unknown_descriptor(descriptor)


@dataclass(frozen=True)
class Catalogue:
    """
    Immutable probe catalogue.

    Declaration order matters: it is the order of probing, of every line in
    the generated artifacts and the fallback order for standard selection.
    """

    languages: tuple[Language, ...]
    features: tuple[Feature, ...]
    options: tuple[Option, ...]
    fatal_warning: WarningFlag = WarningFlag("error")

    def __post_init__(self) -> None:
        _require(self.languages, "catalogue without languages")
        if len(set(self.languages)) != len(self.languages):
            raise CatalogueError("catalogue lists a language twice")
        for feature in self.features:
            if not isinstance(feature, (Attribute, Builtin)):
                raise CatalogueError(f"not a feature: {feature!r}")
        for option in self.options:
            if not isinstance(option, (StandardFlag, WarningFlag)):
                raise CatalogueError(f"not an option: {option!r}")
        descriptors = self.descriptors
        if len(set(descriptors)) != len(descriptors):
            raise CatalogueError("catalogue lists a descriptor twice")
        if self.fatal_warning not in self.options:
            raise CatalogueError(
                f"fatal warning {self.fatal_warning.flag} is not in the options"
            )

    @property
    def descriptors(self) -> tuple[Descriptor, ...]:
        """All descriptors, features first."""
        return self.features + self.options

    def standards(self, language: Language) -> list[StandardFlag]:
        return [
            option
            for option in self.options
            if isinstance(option, StandardFlag) and option.language is language
        ]

    def warnings(self) -> list[WarningFlag]:
        """Warning options that feed the aggregate, without the fatal flag."""
        return [
            option
            for option in self.options
            if isinstance(option, WarningFlag) and option != self.fatal_warning
        ]


def _attribute(
    name: str, *body: str, mode: WrapMode = WrapMode.DECLARATION
) -> Attribute:
    return Attribute(name, tuple(body), mode)


def _builtin(name: str, *body: str) -> Builtin:
    return Builtin(name, tuple(body))


def default_catalogue() -> Catalogue:
    """The built-in catalogue probed by the ``ccprobe`` command."""
    c = Language.C
    cxx = Language.CXX
    features: tuple[Feature, ...] = (
        _attribute(
            "packed",
            "struct probe_packed {",
            "    char c;",
            "    int i;",
            "} __attribute__((packed));",
        ),
        _attribute("unused", "static int probe_unused __attribute__((unused));"),
        _attribute(
            "aligned",
            "static int probe_aligned __attribute__((unused, aligned(16)));",
        ),
        _attribute("noreturn", "void probe_noreturn(void) __attribute__((noreturn));"),
        _attribute("weak", "int probe_weak(void) __attribute__((weak));"),
        _attribute(
            "deprecated", "void probe_deprecated(void) __attribute__((deprecated));"
        ),
        _attribute(
            "always_inline",
            "static inline __attribute__((always_inline)) int",
            "probe_always_inline(int x)",
            "{",
            "    return x + 1;",
            "}",
        ),
        _attribute(
            "format",
            "int probe_format(const char *fmt, ...)",
            "    __attribute__((format(printf, 1, 2)));",
        ),
        _attribute(
            "warn_unused_result",
            "int probe_warn_unused_result(void) __attribute__((warn_unused_result));",
        ),
        _attribute(
            "fallthrough",
            "switch (rand()) {",
            "case 0:",
            "    __attribute__((fallthrough));",
            "default:",
            "    break;",
            "}",
            mode=WrapMode.STATEMENT,
        ),
        _builtin(
            "expect",
            "if (__builtin_expect(rand() == 0, 0))",
            "    return EXIT_FAILURE;",
        ),
        _builtin(
            "popcount",
            "if (__builtin_popcount((unsigned int)rand()) > 32)",
            "    return EXIT_FAILURE;",
        ),
        _builtin(
            "ctz",
            "if (__builtin_ctz((unsigned int)rand() | 1u) > 31)",
            "    return EXIT_FAILURE;",
        ),
        _builtin(
            "clz",
            "if (__builtin_clz((unsigned int)rand() | 1u) > 31)",
            "    return EXIT_FAILURE;",
        ),
        _builtin(
            "bswap32",
            "if (__builtin_bswap32((uint32_t)rand()) == 0u)",
            "    return EXIT_FAILURE;",
        ),
        _builtin(
            "add_overflow",
            "int sum;",
            "if (__builtin_add_overflow(rand(), 1, &sum))",
            "    return EXIT_FAILURE;",
        ),
        _builtin("constant_p", "(void)__builtin_constant_p(rand());"),
        _builtin(
            "unreachable",
            "if (rand() < 0)",
            "    __builtin_unreachable();",
        ),
    )
    options: tuple[Option, ...] = (
        StandardFlag("c23", c),
        StandardFlag("c17", c),
        StandardFlag("c11", c),
        StandardFlag("c99", c),
        StandardFlag("c++23", cxx),
        StandardFlag("c++20", cxx),
        StandardFlag("c++17", cxx),
        StandardFlag("c++14", cxx),
        StandardFlag("c++11", cxx),
        WarningFlag("all"),
        WarningFlag("extra"),
        WarningFlag("pedantic"),
        WarningFlag("shadow"),
        WarningFlag("cast-align"),
        WarningFlag("cast-qual"),
        WarningFlag("pointer-arith"),
        WarningFlag("redundant-decls"),
        WarningFlag("missing-declarations"),
        WarningFlag("write-strings"),
        WarningFlag("format=2"),
        WarningFlag("undef"),
        WarningFlag("strict-prototypes", c),
        WarningFlag("missing-prototypes", c),
        WarningFlag("old-style-definition", c),
        WarningFlag("bad-function-cast", c),
        WarningFlag("nested-externs", c),
        WarningFlag("old-style-cast", cxx),
        WarningFlag("non-virtual-dtor", cxx),
        WarningFlag("overloaded-virtual", cxx),
        WarningFlag("zero-as-null-pointer-constant", cxx),
        WarningFlag("error"),
    )
    return Catalogue(languages=(c, cxx), features=features, options=options)
