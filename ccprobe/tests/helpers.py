"""Small catalogues and fake compilers shared by the tests."""

import os
import stat
from pathlib import Path
from typing import Iterable

from ccprobe.catalogue import (
    Attribute,
    Builtin,
    Catalogue,
    Descriptor,
    Language,
    StandardFlag,
    WarningFlag,
)
from ccprobe.results import ProbeResults


C = Language.C
CXX = Language.CXX

PACKED = Attribute("packed", ("struct s { char c; int i; } __attribute__((packed));",))
EXPECT = Builtin("expect", ("if (__builtin_expect(rand() == 0, 0))", "    return 1;"))
C11 = StandardFlag("c11", C)
C99 = StandardFlag("c99", C)
CXX17 = StandardFlag("c++17", CXX)
WALL = WarningFlag("all")
WEXTRA = WarningFlag("extra")
WSTRICT = WarningFlag("strict-prototypes", C)
WOLDCAST = WarningFlag("old-style-cast", CXX)
WERROR = WarningFlag("error")


def small_catalogue() -> Catalogue:
    return Catalogue(
        languages=(C, CXX),
        features=(PACKED, EXPECT),
        options=(C11, C99, CXX17, WALL, WEXTRA, WSTRICT, WOLDCAST, WERROR),
    )


def results_for(
    catalogue: Catalogue, accepted: dict[Descriptor, Iterable[Language]]
) -> ProbeResults:
    """Results where unlisted descriptors succeeded nowhere."""
    results = ProbeResults(catalogue)
    for descriptor in catalogue.descriptors:
        results.record(descriptor, accepted.get(descriptor, ()))
    return results


def write_script(path: Path, body: str) -> Path:
    """Write an executable /bin/sh script."""
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


# Leaves cwd.txt and args.txt in its working directory, then rejects any command
# line mentioning "bogus" and any source file using __builtin_expect.
FAKE_COMPILER = """\
for last; do :; done
pwd > cwd.txt
echo "$@" >> args.txt
case "$*" in
    *bogus*) echo "error: unknown flag" >&2; exit 1;;
esac
if grep -q __builtin_expect "$last"; then
    echo "error: builtin not supported" >&2
    exit 1
fi
exit 0
"""


def posix_shell_available() -> bool:
    return os.name == "posix" and Path("/bin/sh").exists()
