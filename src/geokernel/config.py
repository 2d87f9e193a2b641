## tolerance configuration for geokernel
## Copyright (c) 2026 the geokernel authors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Numeric tolerances threaded through the geokernel routines.

Every kernel function takes a keyword ``tol`` argument that defaults to
``DEFAULT_TOLERANCE``.  Callers that need a looser or tighter kernel
build their own :class:`Tolerance` (or load one from a YAML profile
with :func:`load_tolerance`) and pass it explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

__all__ = ["Tolerance", "DEFAULT_TOLERANCE", "tolerance_from_mapping", "load_tolerance"]


@dataclass(frozen=True)
class Tolerance:
    """Immutable bundle of the thresholds used by the kernel.

    ``distance``
        two points (or two curve parameters) closer than this are equal.
    ``parallel``
        a direction component below this is treated as zero when picking
        a solving branch; also the ray/triangle determinant threshold.
    ``tiny``
        slope differences and plane projections below this mean the
        inputs are parallel.
    ``nudge``
        edge-parameter step used to sample either side of a polygon crossing.
    """

    distance: float = 1e-6
    parallel: float = 1e-7
    tiny: float = 1e-8
    nudge: float = 1e-3

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not value > 0.0:
                raise ValueError(f"tolerance '{f.name}' must be positive, got {value!r}")

    def scaled(self, factor: float) -> "Tolerance":
        """Return a copy with every threshold multiplied by ``factor``."""

        if not factor > 0.0:
            raise ValueError("scale factor must be positive")
        return replace(
            self,
            distance=self.distance * factor,
            parallel=self.parallel * factor,
            tiny=self.tiny * factor,
            nudge=self.nudge * factor,
        )


DEFAULT_TOLERANCE = Tolerance()


def tolerance_from_mapping(data: Mapping[str, Any], base: Tolerance = DEFAULT_TOLERANCE) -> Tolerance:
    """Overlay the values in ``data`` on ``base``.

    Values are coerced with ``float`` since YAML 1.1 reads ``1e-6``
    (no decimal point) as a string.
    """

    known = {f.name for f in fields(Tolerance)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown tolerance keys: {', '.join(unknown)}")
    values = {}
    for key, raw in data.items():
        try:
            values[key] = float(raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"tolerance '{key}' is not a number: {raw!r}") from exc
    return replace(base, **values)


def load_tolerance(path: Path | str) -> Tolerance:
    """Load a YAML tolerance profile.

    The file is either a flat mapping of tolerance fields or a mapping
    with a top-level ``tolerance:`` key holding one.  Missing fields keep
    their defaults.
    """

    profile = Path(path)
    if not profile.exists():
        raise FileNotFoundError(f"tolerance profile not found: {profile}")
    import yaml

    with profile.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"tolerance profile must be a mapping, got {type(data)!r}")
    if "tolerance" in data:
        data = data["tolerance"] or {}
        if not isinstance(data, dict):
            raise ValueError("'tolerance' entry must be a mapping")
    tol = tolerance_from_mapping(data)
    logger.debug("loaded tolerance profile %s: %s", profile, tol)
    return tol
