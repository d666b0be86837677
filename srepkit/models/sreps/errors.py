"""Error kinds raised (or warned) while handling s-reps."""


class SRepError(Exception):
    """Base class of all s-rep errors."""


class InvalidArgument(SRepError, ValueError):
    """A parameter is out of range, e.g. a negative or too large interpolation level."""


class InvalidState(SRepError):
    """The s-rep itself is malformed or inconsistent (ragged grid, crest/ring mismatch, ...)."""


class NumericDegeneracy(UserWarning):
    """Issued when two opposite spoke directions had to be resolved by the tie-break rule."""
