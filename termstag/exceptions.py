"""Exception classes for image acquisition, decoding and frame access."""


class TermstagError(Exception):
    """Base exception for termstag errors."""

    pass


class AcquisitionError(TermstagError):
    """Raised when the raw image bytes could not be read or downloaded."""

    pass


class DecodeError(TermstagError):
    """Raised for malformed or unsupported image data."""

    pass


class EmptyAnimationError(TermstagError):
    """Raised when a decoder reports an image without any frames."""

    pass


class FrameNotLoadedError(TermstagError):
    """Raised when the tile grid of a frame that failed to load is requested."""

    pass
