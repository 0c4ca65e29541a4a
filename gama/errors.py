"""
Error hierarchy for terrain construction, generation and file handling.
"""

from typing import Any, Optional, Tuple


class GamaError(Exception):
    """Base error for all gama operations."""


class UnknownStrategyError(GamaError, KeyError):
    """
    Requested generation strategy name is not registered.

    Attributes:
        name: The offending strategy name, as given by the caller
    """

    def __init__(self, name: str, available: Optional[Tuple[str, ...]] = None) -> None:
        self.name = name
        self.available = tuple(available) if available else ()
        message = f"Unknown generation method: {name!r}"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return self.args[0]


class UnsupportedFileKindError(GamaError, ValueError):
    """
    Import requested with a file kind other than raster or vector.

    Attributes:
        kind: The offending kind value
    """

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"Unsupported file kind: {kind!r}. Use 'raster' or 'vector'")


class InvalidExtentError(GamaError, ValueError):
    """Extent or cell size does not describe a non-empty grid."""


class GridShapeError(GamaError, ValueError):
    """Grid shape is not accepted by a generation strategy."""

    def __init__(self, shape: Tuple[int, ...], message: str) -> None:
        self.shape = tuple(shape)
        super().__init__(message)
