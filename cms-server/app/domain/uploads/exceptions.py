"""Upload domain specific exceptions."""


class UploadError(Exception):
    """Raised when a file cannot be stored by the upload provider."""
