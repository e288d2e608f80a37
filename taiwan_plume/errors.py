"""Error types raised by the simulator engines."""


class InvalidInput(ValueError):
    """
    Raised when a caller passes something the model cannot work with:
    negative elapsed time, a non-positive spread parameter, a coordinate
    outside the globe, or an unknown enumerated value.
    """
