"""
Errors raised by the catalog transform.

Fatal errors stop the run before (or during) streaming. Row errors never
leave the row loop: the row is counted as skipped and processing continues.
"""


class PipelineError(Exception):
    """Base class for every transform error."""


class DirectoryCreationFailure(PipelineError):
    """The output directory could not be created."""


class MissingInputFailure(PipelineError):
    """The input path is absent or not a regular file."""


class StreamIOFailure(PipelineError):
    """Reading or writing failed after streaming started."""


class RowError(PipelineError):
    """A single data line could not be turned into a record."""


class MalformedRowFailure(RowError):
    pass


class FieldParseFailure(RowError):
    pass
