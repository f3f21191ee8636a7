"""Error kinds raised by the conversion pipeline."""


class AsciifierError(Exception):
    """Base class for every error the pipeline raises."""


class DecodeError(AsciifierError):
    """The image source could not be decoded into a pixel buffer."""


class InvalidOptionsError(AsciifierError, ValueError):
    """The conversion options are unusable even after clamping/defaulting."""


class InternalComputationError(AsciifierError, RuntimeError):
    """A pipeline invariant was violated (programming defect, not user input)."""
