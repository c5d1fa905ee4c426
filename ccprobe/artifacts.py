#!/usr/bin/env python3
"""
Writing generated artifacts to disk.
"""

import logging
import os
import tempfile
from pathlib import Path

from ccprobe.errors import ArtifactError


logger = logging.getLogger(__name__)


def write_artifact(path: Path, text: str) -> None:
    """
    Replace ``path`` with ``text``.

    The text goes to a temporary sibling first and is renamed into place, so
    readers see either the old file or the complete new one.
    """
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.chmod(tmp_name, 0o644)  # mkstemp creates 0600
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ArtifactError(f"Cannot write {path}: {e}") from e
    logger.info("Wrote %s", path)
