## exception types for geokernel
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

"""Exceptions raised by geokernel.

Degenerate geometry (parallel lines, concentric circles, rays that miss)
is never an error; those cases return ``Vector.UNSET``, an empty list or
``nan``.  The exceptions here are reserved for contract violations.
"""

from __future__ import annotations

__all__ = ["GeometryError", "UnsupportedOperationError"]


class GeometryError(Exception):
    """Base class for geokernel errors."""


class UnsupportedOperationError(GeometryError, NotImplementedError):
    """Raised when an operation is asked to handle a curve variant (or a
    pair of variants) it has no solver for."""

    def __init__(self, operation: str, *operands: object):
        self.operation = operation
        self.types = tuple(type(o).__name__ for o in operands)
        super().__init__(f"{operation} is not supported for ({', '.join(self.types)})")
