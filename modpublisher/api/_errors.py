"""Errors raised while configuring or publishing"""


class PublishError(Exception):
    """Base class for modpublisher errors"""


class ConfigurationError(PublishError):
    """Raised when the publishing configuration is invalid"""


class UploadError(PublishError):
    """Raised when an upload failed without the platform client raising an error itself"""
