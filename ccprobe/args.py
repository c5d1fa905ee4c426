#!/usr/bin/env python3
import argparse
import shlex
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from typeguard import typechecked

from ccprobe.catalogue import Language
from ccprobe.config import ProbeConfig, load_config


@typechecked
@dataclass
class ProbeArgs:
    """Type-safe command line arguments"""

    config: Optional[str] = None
    cc: Optional[str] = None
    cxx: Optional[str] = None
    std_c: Optional[str] = None
    std_cxx: Optional[str] = None
    flag: Optional[list[str]] = None  # Extra flags for every probe
    header: Optional[str] = None
    fragment: Optional[str] = None
    name: Optional[str] = None
    scratch: Optional[str] = None
    keep_scratch: bool = False
    trust_options: bool = False
    trust_features: bool = False
    timeout: Optional[float] = None
    width: Optional[int] = None
    list_catalogue: bool = False
    verbose: int = 0
    quiet: bool = False


def parse_args(args: Optional[list[str]] = None) -> ProbeArgs:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="ccprobe",
        description=(
            "Probe a C/C++ compiler and generate a capability header "
            "and a make fragment"
        ),
    )
    parser.add_argument("--config", type=str, help="TOML configuration file")

    compiler_group = parser.add_argument_group("compilers")
    compiler_group.add_argument(
        "--cc", type=str, help="C compiler command (default: $CC or cc)"
    )
    compiler_group.add_argument(
        "--cxx", type=str, help="C++ compiler command (default: $CXX or c++)"
    )
    compiler_group.add_argument(
        "--std-c", type=str, help="Preferred C standard (default: c17)"
    )
    compiler_group.add_argument(
        "--std-cxx", type=str, help="Preferred C++ standard (default: c++17)"
    )
    compiler_group.add_argument(
        "--flag",
        action="append",
        metavar="FLAG",
        help="Flag passed to every probe, repeatable (use --flag=-Werror)",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument("--header", type=str, help="Path of the generated header")
    output_group.add_argument(
        "--fragment", type=str, help="Path of the generated make fragment"
    )
    output_group.add_argument(
        "--name", type=str, help="Project name used in the header include guard"
    )
    output_group.add_argument(
        "--width", type=int, help="Line width limit for wrapped warning lists"
    )

    probe_group = parser.add_argument_group("probing")
    probe_group.add_argument(
        "--scratch", type=str, help="Scratch directory for probe fixtures"
    )
    probe_group.add_argument(
        "--keep-scratch",
        action="store_true",
        help="Keep the scratch directory after a successful run",
    )
    probe_group.add_argument(
        "--trust-options",
        action="store_true",
        help="Assume every compiler flag works, without running the compiler",
    )
    probe_group.add_argument(
        "--trust-features",
        action="store_true",
        help="Assume every attribute and builtin works, without running the compiler",
    )
    probe_group.add_argument(
        "--timeout",
        type=float,
        help="Seconds before a hung compiler counts as a failed probe (0 disables)",
    )

    parser.add_argument(
        "--list",
        dest="list_catalogue",
        action="store_true",
        help="List the probe catalogue and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="More output; twice shows compiler command lines and diagnostics",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Only report errors"
    )

    parsed_args = parser.parse_args(args)
    if parsed_args.verbose and parsed_args.quiet:
        parser.error("--verbose and --quiet are mutually exclusive")

    return ProbeArgs(
        config=parsed_args.config,
        cc=parsed_args.cc,
        cxx=parsed_args.cxx,
        std_c=parsed_args.std_c,
        std_cxx=parsed_args.std_cxx,
        flag=parsed_args.flag,
        header=parsed_args.header,
        fragment=parsed_args.fragment,
        name=parsed_args.name,
        scratch=parsed_args.scratch,
        keep_scratch=parsed_args.keep_scratch,
        trust_options=parsed_args.trust_options,
        trust_features=parsed_args.trust_features,
        timeout=parsed_args.timeout,
        width=parsed_args.width,
        list_catalogue=parsed_args.list_catalogue,
        verbose=parsed_args.verbose,
        quiet=parsed_args.quiet,
    )


def resolve_config(args: ProbeArgs, base: Optional[ProbeConfig] = None) -> ProbeConfig:
    """Defaults, then the configuration file, then command line overrides."""
    config = base if base is not None else ProbeConfig()
    if args.config:
        config = load_config(Path(args.config), config)

    changes: dict[str, Any] = {}
    compilers = dict(config.compilers)
    if args.cc:
        compilers[Language.C] = shlex.split(args.cc)
    if args.cxx:
        compilers[Language.CXX] = shlex.split(args.cxx)
    if compilers != config.compilers:
        changes["compilers"] = compilers

    standards = dict(config.standards)
    if args.std_c:
        standards[Language.C] = args.std_c
    if args.std_cxx:
        standards[Language.CXX] = args.std_cxx
    if standards != config.standards:
        changes["standards"] = standards

    if args.flag:
        changes["flags"] = config.flags + args.flag
    if args.header:
        changes["header"] = Path(args.header)
    if args.fragment:
        changes["fragment"] = Path(args.fragment)
    if args.name:
        changes["name"] = args.name
    if args.scratch:
        changes["scratch"] = Path(args.scratch)
    if args.width is not None:
        changes["width"] = args.width
    if args.timeout is not None:
        changes["timeout"] = args.timeout if args.timeout > 0 else None
    # Switches only ever turn behaviour on; the file may have done so already.
    if args.keep_scratch:
        changes["keep_scratch"] = True
    if args.trust_options:
        changes["trust_options"] = True
    if args.trust_features:
        changes["trust_features"] = True

    return replace(config, **changes) if changes else config
