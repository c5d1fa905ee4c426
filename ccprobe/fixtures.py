#!/usr/bin/env python3
"""
Fixture builder: minimal compilation units written into numbered scratch dirs.

Scratch layout::

    <scratch root>/
        0000/attribute_packed.c
        0000/attribute_packed.cpp
        0001/std_c17.c
        ...

Every probe gets a fresh directory. The same rendered text is written once
per language; only the file suffix differs, since for most probes it is the
flags and not the syntax that changes between languages.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from ccprobe.catalogue import (
    Attribute,
    Builtin,
    Descriptor,
    Language,
    StandardFlag,
    WarningFlag,
    WrapMode,
    unknown_descriptor,
)
from ccprobe.errors import ScratchError
from ccprobe.naming import source_name


logger = logging.getLogger(__name__)

INCLUDES = ("#include <stdlib.h>", "#include <stdint.h>")
INDENT = "    "


def wrap_mode(descriptor: Descriptor) -> WrapMode:
    match descriptor:
        case Attribute(mode=mode) | Builtin(mode=mode):
            return mode
        case StandardFlag() | WarningFlag():
            return WrapMode.TRIVIAL
        case _:
            unknown_descriptor(descriptor)


def snippet(descriptor: Descriptor) -> tuple[str, ...]:
    match descriptor:
        case Attribute(body=body) | Builtin(body=body):
            return body
        case StandardFlag() | WarningFlag():
            return ()
        case _:
            unknown_descriptor(descriptor)


def render_source(body: Sequence[str], mode: WrapMode) -> str:
    """
    Wrap ``body`` in the fixture template.

    Args:
        body: Snippet lines, without indentation
        mode: STATEMENT puts the lines inside main(), DECLARATION puts them
            at file scope between the includes and main(), TRIVIAL ignores
            them

    Returns:
        str: Complete source text, newline terminated
    """
    lines = list(INCLUDES)
    lines.append("")
    if mode is WrapMode.DECLARATION:
        lines.extend(body)
        lines.append("")
    lines.extend(["int", "main(void)", "{"])
    if mode is WrapMode.STATEMENT:
        lines.extend(INDENT + line if line else line for line in body)
    lines.append(INDENT + "return EXIT_SUCCESS;")
    lines.append("}")
    return "\n".join(lines) + "\n"


@dataclass(frozen=True)
class Fixture:
    """One probe's scratch directory and its source file per language."""

    directory: Path
    files: dict[Language, str] = field(default_factory=dict)


class FixtureBuilder:
    """
    Allocates numbered fixture directories below a scratch root.

    The counter only ever grows, so fixture directories are never reused
    within a run.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self._counter = 0
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ScratchError(f"Cannot create scratch root {self.root}: {e}") from e

    def _allocate(self) -> Path:
        directory = self.root / f"{self._counter:04d}"
        self._counter += 1
        try:
            directory.mkdir()
        except OSError as e:
            raise ScratchError(
                f"Cannot create fixture directory {directory}: {e}"
            ) from e
        return directory

    def build(self, descriptor: Descriptor, languages: Iterable[Language]) -> Fixture:
        """
        Render ``descriptor`` into a new fixture directory.

        Args:
            descriptor: Feature or option to build a compilation unit for
            languages: Languages to write a source file for

        Returns:
            Fixture: Directory plus file name per language
        """
        directory = self._allocate()
        text = render_source(snippet(descriptor), wrap_mode(descriptor))
        files: dict[Language, str] = {}
        for language in languages:
            name = source_name(descriptor, language)
            try:
                (directory / name).write_text(text, encoding="utf-8")
            except OSError as e:
                raise ScratchError(
                    f"Cannot write fixture {directory / name}: {e}"
                ) from e
            files[language] = name
        logger.debug("Fixture %s: %s", directory, ", ".join(files.values()))
        return Fixture(directory=directory, files=files)

    def remove(self) -> None:
        """Delete the scratch root and everything below it."""
        logger.debug("Removing scratch root %s", self.root)
        shutil.rmtree(self.root)
