"""Base exception for everything that can go wrong with a grade container."""


class GradeFileError(Exception):
    """Base class for codec, parse, schema and mapping failures."""
    pass
