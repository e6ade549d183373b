"""Exceptions raised by the UR-ly service."""


class URLyError(Exception):
    """Base class for all UR-ly errors."""


class ValidationError(URLyError):
    """A subscribe request is missing fields or carries an unusable value."""


class StorageError(URLyError):
    """The subscription table could not be read or written."""


class PollError(URLyError):
    """The UR search API could not be reached or answered with an error."""


class ParseError(PollError):
    """The UR search API answered with a body we cannot interpret."""


class NotifyError(URLyError):
    """A Slack webhook rejected or failed to receive a notification."""
