"""Exception hierarchy for bandtrace.

Invalid constructor arguments (non-positive radius, zero-length vectors,
bad camera parameters) raise plain ValueError at build time. The classes
below cover failures that happen after a scene has been built.
"""


class BandtraceError(Exception):
    """Base class for all bandtrace errors."""


class RenderError(BandtraceError):
    """A render worker failed; the whole run is aborted."""


class OutputError(BandtraceError):
    """The rendered image could not be encoded or written."""


class SceneError(BandtraceError, ValueError):
    """A scene description is malformed."""
