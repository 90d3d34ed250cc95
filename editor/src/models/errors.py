"""Error taxonomy for the crop pipeline.

Loader errors are local and recoverable: the session keeps its previous
raster and transform and simply declines to update.
"""


class CropperError(Exception):
    """Base class for all cropper errors."""


class UnsupportedMediaError(CropperError):
    """Payload does not declare an image media type."""

    def __init__(self, media_type, name=""):
        self.media_type = media_type
        self.name = name
        label = f" ({name})" if name else ""
        super().__init__(f"Unsupported media type {media_type!r}{label}: please choose an image file")


class DecodeError(CropperError):
    """Payload claims to be an image but could not be decoded."""

    def __init__(self, name="", reason=""):
        self.name = name
        self.reason = reason
        message = f"Could not decode image {name!r}" if name else "Could not decode image"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ClampedInputWarning(UserWarning):
    """A scale request fell outside the allowed range and was corrected.

    Never raised. Only used to describe the correction in the log.
    """

    def __init__(self, requested, clamped):
        self.requested = requested
        self.clamped = clamped
        super().__init__(f"Scale {requested} clamped to {clamped}")
