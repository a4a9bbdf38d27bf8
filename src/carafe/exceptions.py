"""Exceptions raised by carafe message and upload objects."""


class InvalidArgumentError(TypeError, ValueError):
    """A caller passed a malformed argument.

    Subclasses both ``TypeError`` and ``ValueError`` so callers can catch
    whichever one reads naturally at the call site.
    """


class UploadStateError(RuntimeError):
    """An uploaded file was used from a state that forbids it."""


class UploadMoveError(RuntimeError):
    def __init__(self, target_path, message=None):
        self.target_path = target_path
        super().__init__(
            message or f"Uploaded file could not be moved to {target_path!r}"
        )
