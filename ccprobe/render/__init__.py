"""Artifact renderers."""

from ccprobe.render.fragment import render_fragment, select_standard
from ccprobe.render.header import render_header
from ccprobe.render.packing import pack_assignment


__all__ = ["pack_assignment", "render_fragment", "render_header", "select_standard"]
