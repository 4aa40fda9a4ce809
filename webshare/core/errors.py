class ShareError(Exception):
    """Base error for the sharing service. ``str(exc)`` is safe to show to clients."""

class StorageError(ShareError):
    pass

class CodeGenerationError(ShareError):
    pass
