"""Typed domain errors for OSM Simple Nav.

All errors inherit from OSMNavError and can optionally wrap a root
cause exception for debugging. Loaders never return a partial graph:
any problem with the input surfaces as a MapLoadError subclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class OSMNavError(Exception):
    """Base error for the navigation domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class MapLoadError(OSMNavError):
    """A map document could not be turned into a graph.

    Attributes:
        file_path: Path to the document being loaded
    """

    file_path: Optional[str] = None


@dataclass
class MissingElementError(MapLoadError):
    """A required element or attribute is absent from the document.

    Raised for a missing ``bounds`` element, a missing ``bb`` graph
    attribute, an ``nd`` reference without a matching ``node``, or a
    description node without ``pos``/``comment``.

    Attributes:
        element: Name of the missing element or attribute
    """

    element: str = ""


@dataclass
class MalformedValueError(MapLoadError):
    """A numeric field (coordinate, bounding box, speed) is not a number.

    Attributes:
        value: The offending literal
    """

    value: str = ""


@dataclass
class UnsupportedFormatError(OSMNavError):
    """The file extension does not select any known loader or exporter.

    Attributes:
        file_path: The rejected path
        suffix: Extension that was not recognized
    """

    file_path: Optional[str] = None
    suffix: str = ""


@dataclass
class GraphError(OSMNavError):
    """Referential integrity of a graph is broken.

    Attributes:
        vertex_id: Identifier that could not be resolved
    """

    vertex_id: str = ""


@dataclass
class ExportError(OSMNavError):
    """Rendering or exporting a graph failed.

    Attributes:
        output_path: Path where the export was attempted
        exporter_type: Type of exporter that failed
    """

    output_path: Optional[str] = None
    exporter_type: str = ""
