# -*- coding: utf-8 -*-
"""geokernel: intersection, containment and clipping over lines, arcs,
polylines and polygons, plus ray/plane/mesh queries."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("geokernel")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
