#!/usr/bin/env python3
"""
Exception types raised by ccprobe.

A compiler rejecting a probe is not an error and never raises; everything
here aborts the run.
"""


class CcprobeError(Exception):
    """Base class for all fatal ccprobe errors."""


class ConfigError(CcprobeError):
    """Configuration file or command line values are unusable."""


class CatalogueError(CcprobeError):
    """A catalogue entry is malformed (programming defect, not user error)."""


class ScratchError(CcprobeError):
    """The scratch area or a fixture file could not be created."""


class ArtifactError(CcprobeError):
    """A generated artifact could not be written."""


class CompilerNotFoundError(CcprobeError):
    """The configured compiler cannot be executed at all."""

    def __init__(self, command: list[str], reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Cannot run compiler {' '.join(command)!r}: {reason}")
