class InvalidInputError(ValueError):
    """Raised when inputs violate the documented contract of a function,
    e.g. misaligned tables, missing loci or undefined statistics."""
