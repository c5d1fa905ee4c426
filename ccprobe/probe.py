#!/usr/bin/env python3
"""
Probe executor and the sequential probe driver.

A probe compiles one fixture file with the configured compiler and turns the
exit status into a yes/no verdict. The working directory is handed straight
to the child process, the caller's own working directory never changes.
"""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence

from ccprobe.catalogue import (
    Attribute,
    Builtin,
    Catalogue,
    Descriptor,
    Language,
    StandardFlag,
    WarningFlag,
    applies_to,
    unknown_descriptor,
)
from ccprobe.errors import CompilerNotFoundError
from ccprobe.fixtures import FixtureBuilder
from ccprobe.process import kill_process_tree
from ccprobe.results import ProbeResults


logger = logging.getLogger(__name__)

DRAIN_TIMEOUT = 5.0  # Seconds to collect output after killing a hung compiler


class Verdict(Enum):
    """Progress verdict for one descriptor/language pair."""

    YES = "yes"
    NO = "no"
    SKIPPED = "skipped"  # Option scoped to another language
    ASSUMED = "assumed"  # Trust mode, compiler never invoked


Reporter = Callable[[Descriptor, Language, Verdict], None]


@dataclass
class Result:
    """
    Result of one compiler invocation.
    """

    ok: bool
    output: str  # stdout and stderr, merged
    return_code: Optional[int]  # None when the probe timed out
    command: list[str]


class ProbeExecutor:
    """
    Runs the compiler against fixture files.

    Baseline command line::

        <compiler...> <common flags...> -c -o <stem>.o <extra flags...> <file>
    """

    def __init__(
        self,
        compilers: dict[Language, list[str]],
        flags: Sequence[str] = (),
        timeout: Optional[float] = None,
    ):
        """
        Args:
            compilers: Compiler command words per language, e.g. ["ccache", "gcc"]
            flags: Flags passed to every probe, before the flag under test
            timeout: Seconds before a hung compiler is killed; the probe then
                counts as failed. None waits forever.
        """
        self.compilers = compilers
        self.flags = list(flags)
        self.timeout = timeout

    def command(
        self, language: Language, filename: str, extra_flags: Sequence[str] = ()
    ) -> list[str]:
        obj = Path(filename).stem + ".o"
        return [
            *self.compilers[language],
            *self.flags,
            "-c",
            "-o",
            obj,
            *extra_flags,
            filename,
        ]

    def run(
        self,
        language: Language,
        directory: Path,
        filename: str,
        extra_flags: Sequence[str] = (),
    ) -> Result:
        cmd = self.command(language, filename, extra_flags)
        logger.debug("[%s] %s", directory, " ".join(cmd))
        try:
            process = subprocess.Popen(
                cmd,
                cwd=directory,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,  # Merge stderr into stdout
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise CompilerNotFoundError(self.compilers[language], str(e)) from e

        try:
            output, _ = process.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            kill_process_tree(process.pid)
            try:
                process.communicate(timeout=DRAIN_TIMEOUT)
            except subprocess.TimeoutExpired:
                # A detached grandchild still holds the pipe
                process.stdout.close()
                process.wait()
            logger.warning(
                "Compiler timed out after %ss on %s, counting as failed",
                self.timeout,
                directory / filename,
            )
            return Result(ok=False, output="", return_code=None, command=cmd)
        except KeyboardInterrupt:
            kill_process_tree(process.pid)
            raise

        output = output or ""
        for line in output.splitlines():
            logger.debug("    %s", line)
        return Result(
            ok=(process.returncode == 0),
            output=output,
            return_code=process.returncode,
            command=cmd,
        )

    def probe(
        self,
        language: Language,
        directory: Path,
        filename: str,
        extra_flags: Sequence[str] = (),
    ) -> bool:
        """True iff the compiler exits with status zero."""
        return self.run(language, directory, filename, extra_flags).ok


def _report(
    reporter: Optional[Reporter],
    descriptor: Descriptor,
    language: Language,
    verdict: Verdict,
) -> None:
    if reporter is not None:
        reporter(descriptor, language, verdict)


def probe_catalogue(
    catalogue: Catalogue,
    builder: Optional[FixtureBuilder],
    executor: Optional[ProbeExecutor],
    trust_features: bool = False,
    trust_options: bool = False,
    reporter: Optional[Reporter] = None,
) -> ProbeResults:
    """
    Probe every catalogue descriptor, one compiler process at a time.

    Args:
        catalogue: What to probe
        builder: Creates fixtures; may be None when both trust switches are on
        executor: Runs the compiler; may be None when both trust switches are on
        trust_features: Mark all features as supported without compiling
        trust_options: Mark all options as supported (for the languages they
            apply to) without compiling
        reporter: Called once per descriptor and catalogue language

    Returns:
        ProbeResults: Complete outcome table
    """
    results = ProbeResults(catalogue)
    for descriptor in catalogue.descriptors:
        match descriptor:
            case StandardFlag() | WarningFlag():
                trusted = trust_options
                extra_flags = [descriptor.flag]
            case Attribute() | Builtin():
                trusted = trust_features
                extra_flags = []
            case _:
                unknown_descriptor(descriptor)

        applicable = [
            lang for lang in catalogue.languages if applies_to(descriptor, lang)
        ]
        accepted: list[Language] = []
        if trusted:
            accepted = applicable
        elif applicable:
            if builder is None or executor is None:
                raise ValueError("Probing without trust needs a builder and executor")
            # Every language gets a source file, only applicable ones compile
            fixture = builder.build(descriptor, catalogue.languages)
            for language in applicable:
                if executor.probe(
                    language, fixture.directory, fixture.files[language], extra_flags
                ):
                    accepted.append(language)

        for language in catalogue.languages:
            if language not in applicable:
                verdict = Verdict.SKIPPED
            elif trusted:
                verdict = Verdict.ASSUMED
            elif language in accepted:
                verdict = Verdict.YES
            else:
                verdict = Verdict.NO
            _report(reporter, descriptor, language, verdict)
        results.record(descriptor, accepted)
    return results
