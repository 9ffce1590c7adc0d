"""
Failures raised inside the resolution pipeline.

None of these escape `Resizer.resolve`: they are logged and reported to the
caller as an empty result.
"""


class ResizeError(Exception):
    pass


class InvalidInput(ResizeError, ValueError):
    pass


class SourceUnavailable(ResizeError):
    pass


class MetadataUnavailable(ResizeError):
    pass


class UnsupportedAction(ResizeError, ValueError):
    pass


class TransformFailure(ResizeError):
    pass


class BackendError(Exception):
    """A storage client call failed for a reason other than absence"""

    def __init__(self, path: str, cause: Exception):
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause
