#!/usr/bin/env python3
"""
ccprobe command line entry point.

Probes the configured compilers against the built-in catalogue, then writes
the capability header and the make fragment.
"""

import logging
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ccprobe.args import parse_args, resolve_config
from ccprobe.artifacts import write_artifact
from ccprobe.catalogue import Catalogue, default_catalogue
from ccprobe.config import ProbeConfig
from ccprobe.errors import CcprobeError, ScratchError
from ccprobe.fixtures import FixtureBuilder
from ccprobe.output import ProgressOutput
from ccprobe.probe import ProbeExecutor, probe_catalogue
from ccprobe.render import render_fragment, render_header
from ccprobe.results import ProbeResults


logger = logging.getLogger(__name__)


@dataclass
class Artifacts:
    """Rendered output of one run."""

    header: str
    fragment: str
    results: ProbeResults


def _scratch_root(config: ProbeConfig) -> Path:
    try:
        if config.scratch is not None:
            config.scratch.mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix="ccprobe-", dir=config.scratch))
    except OSError as e:
        raise ScratchError(f"Cannot create scratch directory: {e}") from e


def generate(
    config: ProbeConfig,
    catalogue: Catalogue,
    output: Optional[ProgressOutput] = None,
) -> Artifacts:
    """
    Probe ``catalogue`` and render both artifacts, without writing them.

    The scratch directory is removed on success unless ``keep_scratch`` is
    set. After a failure it is always kept for inspection.
    """
    builder = None
    executor = None
    if not (config.trust_features and config.trust_options):
        builder = FixtureBuilder(_scratch_root(config))
        executor = ProbeExecutor(config.compilers, config.flags, config.timeout)
        logger.info("Scratch directory: %s", builder.root)

    try:
        results = probe_catalogue(
            catalogue,
            builder,
            executor,
            trust_features=config.trust_features,
            trust_options=config.trust_options,
            reporter=output,
        )
        header = render_header(catalogue, results, project=config.name)
        fragment = render_fragment(
            catalogue, results, preferred=config.standards, width=config.width
        )
    except CcprobeError:
        if builder is not None and output is not None:
            output.error(f"Probe fixtures kept in {builder.root}")
        raise

    if builder is not None:
        if config.keep_scratch:
            if output is not None:
                output.info(f"Probe fixtures kept in {builder.root}")
        else:
            builder.remove()
    return Artifacts(header=header, fragment=fragment, results=results)


def _setup_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    _setup_logging(args.verbose, args.quiet)
    output = ProgressOutput(quiet=args.quiet)
    catalogue = default_catalogue()

    if args.list_catalogue:
        output.catalogue(catalogue)
        return 0

    try:
        config = resolve_config(args)
        artifacts = generate(config, catalogue, output)
        write_artifact(config.header, artifacts.header)
        write_artifact(config.fragment, artifacts.fragment)
    except CcprobeError as e:
        output.error(f"ccprobe: {e}")
        return 1
    except KeyboardInterrupt:
        output.error("ccprobe: interrupted")
        return 130

    output.info(f"Wrote {config.header} and {config.fragment}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
