from __future__ import annotations


class ResourceLibraryError(Exception):
    pass


class BlockedEmbedHostError(ResourceLibraryError):
    def __init__(self, context: str, url: str = ""):
        super().__init__(f"Blocked embed host for {context}")
        self.context = context
        self.url = url


class ResourceInputError(ResourceLibraryError, ValueError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field
