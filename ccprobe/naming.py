#!/usr/bin/env python3
"""
Names derived from catalogue entries.

Fixture file names, header macros and make variables all come from here so
the two artifacts and the scratch layout agree with each other.
"""

import re

from ccprobe.catalogue import (
    Attribute,
    Builtin,
    Descriptor,
    Language,
    StandardFlag,
    WarningFlag,
    unknown_descriptor,
)


_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")

# Prefix of every option macro in the generated header.
COMPILER_FLAG_TAG = "HAVE_COMPILER_FLAG"


def sanitize(text: str) -> str:
    """
    Turn arbitrary text (usually a compiler flag) into an identifier fragment.

    ``++`` becomes ``plusplus`` first so ``-std=c++17`` and ``-std=c17`` stay
    distinct; every run of other non-alphanumeric characters collapses to a
    single underscore and separators at either end are dropped.

    Examples:
        -std=c++17           -> std_cplusplus17
        -Wstrict-prototypes  -> Wstrict_prototypes
        -Wformat=2           -> Wformat_2
    """
    return _NON_ALNUM.sub("_", text.replace("++", "plusplus")).strip("_")


def stem(descriptor: Descriptor) -> str:
    """File name stem of the fixture source for ``descriptor``."""
    match descriptor:
        case Attribute() | Builtin():
            return sanitize(f"{descriptor.kind}_{descriptor.name}")
        case StandardFlag() | WarningFlag():
            return sanitize(descriptor.flag)
        case _:
            unknown_descriptor(descriptor)


def source_name(descriptor: Descriptor, language: Language) -> str:
    return stem(descriptor) + language.suffix


def macro_name(descriptor: Descriptor, language: Language) -> str:
    """Header macro (and boolean make variable) for one descriptor/language."""
    match descriptor:
        case Attribute() | Builtin():
            body = f"HAVE_{language.tag}_{descriptor.kind}_{descriptor.name}"
        case StandardFlag() | WarningFlag():
            body = f"{COMPILER_FLAG_TAG}_{language.tag}_{descriptor.flag}"
        case _:
            unknown_descriptor(descriptor)
    return sanitize(body).upper()


def guard_name(project: str) -> str:
    """Include guard of the generated header."""
    return f"INC_{sanitize(project).upper()}_GENERATED"


def standard_variable(language: Language) -> str:
    return f"{language.variable_prefix}_STANDARD"


def strictness_variable(language: Language) -> str:
    return f"{language.variable_prefix}_STRICTNESS"


def fatal_warnings_variable(language: Language) -> str:
    return f"{language.variable_prefix}_FATAL_WARNINGS"
