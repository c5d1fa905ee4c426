#!/usr/bin/env python3
"""
Render the capability header.

Every descriptor produces exactly one line per catalogue language: an active
``#define`` when the compiler accepted it, otherwise a commented ``#undef``
placeholder that says whether the probe failed or was skipped because the
option is scoped to another language. The header therefore always lists the
full catalogue and diffs cleanly between toolchains.
"""

from ccprobe.catalogue import Catalogue, Descriptor, Language, applies_to
from ccprobe.naming import guard_name, macro_name
from ccprobe.results import ProbeResults


FAILED = "failed"
SKIPPED = "skipped"


def header_line(
    descriptor: Descriptor, language: Language, results: ProbeResults
) -> str:
    macro = macro_name(descriptor, language)
    if results.succeeded(descriptor, language):
        return f"#define {macro} 1"
    reason = FAILED if applies_to(descriptor, language) else SKIPPED
    return f"/* #undef {macro} ({reason}) */"


def render_header(
    catalogue: Catalogue, results: ProbeResults, project: str = "ccprobe"
) -> str:
    """
    Args:
        catalogue: Descriptors to list, in declaration order
        results: Complete outcome table for ``catalogue``
        project: Name used for the include guard

    Returns:
        str: Header text, newline terminated
    """
    results.require_complete()
    guard = guard_name(project)
    lines = [
        "/* Generated by ccprobe. Do not edit. */",
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
    ]
    for descriptor in catalogue.descriptors:
        for language in catalogue.languages:
            lines.append(header_line(descriptor, language, results))
    lines.append("")
    lines.append(f"#endif /* {guard} */")
    return "\n".join(lines) + "\n"
