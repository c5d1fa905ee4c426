#!/usr/bin/env python3
"""
Console progress output.

Uses the Rich library for consistent colors across terminals. Progress goes
to stdout, errors to stderr.
"""

from typing import Optional

from rich.console import Console
from rich.text import Text

from ccprobe.catalogue import Catalogue, Descriptor, Language, describe, scope_of
from ccprobe.probe import Verdict


VERDICT_STYLES = {
    Verdict.YES: "green",
    Verdict.NO: "red",
    Verdict.SKIPPED: "dim",
    Verdict.ASSUMED: "yellow",
}


class ProgressOutput:
    """
    Prints one "checking for ..." line per probe verdict.

    Instances are usable directly as the probe driver's reporter.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
        quiet: bool = False,
    ):
        self.console = console if console is not None else Console(highlight=False)
        self.error_console = (
            error_console
            if error_console is not None
            else Console(stderr=True, highlight=False)
        )
        self.quiet = quiet

    def __call__(
        self, descriptor: Descriptor, language: Language, verdict: Verdict
    ) -> None:
        if self.quiet:
            return
        text = Text()
        text.append(f"checking for {describe(descriptor)} ({language.label})... ")
        text.append(verdict.value, style=VERDICT_STYLES[verdict])
        self.console.print(text)

    def info(self, message: str) -> None:
        if not self.quiet:
            self.console.print(message, style="blue", markup=False)

    def error(self, message: str) -> None:
        self.error_console.print(message, style="red", markup=False)

    def catalogue(self, catalogue: Catalogue) -> None:
        """Print the catalogue, one descriptor per line."""
        for descriptor in catalogue.descriptors:
            scope = scope_of(descriptor)
            line = f"{descriptor.kind:<10} {describe(descriptor)}"
            if scope is not None:
                line += f"  [{scope.label} only]"
            if descriptor == catalogue.fatal_warning:
                line += "  [fatal warnings]"
            self.console.print(line, markup=False)
