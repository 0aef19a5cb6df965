"""
Error kinds raised by the resolvers and the store.

Each carries the HTTP-like status and the (untranslated) HTML message that
the dispatcher sends back. Nothing here is retried or recovered.
"""

from kb import messages


class KnowledgeBaseError(Exception):
    """Base class: a request that cannot be answered with a 200."""
    status: int = 400

    def __init__(self, message: str, detail: str = None):
        super().__init__(detail or message)
        self.message = message
        self.detail = detail


class MissingParameter(KnowledgeBaseError):
    """A required action parameter is absent."""


class MalformedParameter(KnowledgeBaseError):
    """A parameter is present but does not follow its grammar."""


class NotFound(KnowledgeBaseError):
    """A well-formed request that no row satisfies in any language."""


class UnknownAction(KnowledgeBaseError):
    """The action is absent or not one the service knows."""

    def __init__(self, action: str = None):
        super().__init__(messages.USAGE, detail=f"Unknown action: {action!r}")
        self.action = action


class StoreUnavailable(KnowledgeBaseError):
    """The database could not be opened or a query failed."""
    status = 500

    def __init__(self, detail: str = None):
        super().__init__(messages.DATABASE, detail=detail)
