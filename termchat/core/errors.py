"""Exception types raised by termchat."""


class TermchatError(Exception):
    """Base class for all termchat errors."""


class ConfigurationError(TermchatError):
    """Bad or missing configuration (no credential, empty prompt, ...).

    Always fatal: the process exits with status 1 before any request is made.
    """


class NetworkError(TermchatError):
    """The completion endpoint reported a failure."""
