#!/usr/bin/env python3
"""
Render the make fragment.

Per language the fragment carries the selected standard, the packed list of
accepted warning flags and the fatal-warnings flag. It closes with a 0/1
variable for every descriptor and language, mirroring the header.
"""

from typing import Mapping, Optional

from ccprobe.catalogue import Catalogue, Language, StandardFlag, WarningFlag
from ccprobe.naming import (
    fatal_warnings_variable,
    macro_name,
    standard_variable,
    strictness_variable,
)
from ccprobe.render.packing import DEFAULT_WIDTH, pack_assignment
from ccprobe.results import ProbeResults


def select_standard(
    catalogue: Catalogue,
    results: ProbeResults,
    language: Language,
    preferred: Optional[str] = None,
) -> Optional[StandardFlag]:
    """
    Pick the standard flag for ``language``.

    The preferred identifier wins when the compiler accepted it. Otherwise
    the first accepted standard in catalogue order is used. None means the
    compiler accepted no standard at all.
    """
    accepted = [
        standard
        for standard in catalogue.standards(language)
        if results.succeeded(standard, language)
    ]
    if not accepted:
        return None
    for standard in accepted:
        if standard.identifier == preferred:
            return standard
    return accepted[0]


def accepted_warnings(
    catalogue: Catalogue, results: ProbeResults, language: Language
) -> list[WarningFlag]:
    """Aggregate warnings accepted for ``language``, in catalogue order."""
    return [
        warning
        for warning in catalogue.warnings()
        if results.succeeded(warning, language)
    ]


def _assign(variable: str, value: Optional[str]) -> str:
    return f"{variable} = {value}" if value else f"{variable} ="


def language_block(
    catalogue: Catalogue,
    results: ProbeResults,
    language: Language,
    preferred: Optional[str] = None,
    width: int = DEFAULT_WIDTH,
) -> list[str]:
    standard = select_standard(catalogue, results, language, preferred)
    lines = [_assign(standard_variable(language), standard.flag if standard else None)]
    lines.extend(
        pack_assignment(
            strictness_variable(language),
            [w.flag for w in accepted_warnings(catalogue, results, language)],
            width=width,
        )
    )
    fatal = catalogue.fatal_warning
    lines.append(
        _assign(
            fatal_warnings_variable(language),
            fatal.flag if results.succeeded(fatal, language) else None,
        )
    )
    return lines


def boolean_lines(catalogue: Catalogue, results: ProbeResults) -> list[str]:
    """One ``MACRO = 0|1`` line per descriptor and language, features first."""
    return [
        f"{macro_name(d, language)} = {int(results.succeeded(d, language))}"
        for d in catalogue.descriptors
        for language in catalogue.languages
    ]


def render_fragment(
    catalogue: Catalogue,
    results: ProbeResults,
    preferred: Optional[Mapping[Language, str]] = None,
    width: int = DEFAULT_WIDTH,
) -> str:
    """
    Args:
        catalogue: Descriptors to render, in declaration order
        results: Complete outcome table for ``catalogue``
        preferred: Preferred standard identifier per language
        width: Line width limit for the packed warning list

    Returns:
        str: Make fragment text, newline terminated
    """
    results.require_complete()
    preferred = preferred or {}
    lines = ["# Generated by ccprobe. Do not edit.", ""]
    for language in catalogue.languages:
        lines.extend(
            language_block(
                catalogue, results, language, preferred.get(language), width
            )
        )
        lines.append("")
    lines.extend(boolean_lines(catalogue, results))
    return "\n".join(lines) + "\n"
