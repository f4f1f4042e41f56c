"""
Domain exceptions raised by the catalog services.

Every error carries a human-readable message. The API layer maps each family
to an HTTP status code; callers embedding the catalog directly can branch on
the class instead.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(CatalogError):
    """Raised when a request is missing required data or has a malformed id."""


class UnknownTagError(InvalidInputError):
    """Raised when a bookmark references tag ids that do not exist."""

    def __init__(self, tag_ids: list[int]) -> None:
        self.tag_ids = tag_ids
        ids = ", ".join(str(tag_id) for tag_id in tag_ids)
        super().__init__(f"Unknown tag id(s): {ids}")


class NotFoundError(CatalogError):
    """Raised when a referenced entity does not exist."""


class BookmarkNotFoundError(NotFoundError):
    """Raised when a bookmark id does not exist."""

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark {bookmark_id} not found")


class TagNotFoundError(NotFoundError):
    """Raised when a tag id does not exist."""

    def __init__(self, tag_id: int) -> None:
        self.tag_id = tag_id
        super().__init__(f"Tag {tag_id} not found")


class ConflictError(CatalogError):
    """Raised when a write violates a uniqueness constraint."""


class TagAlreadyExistsError(ConflictError):
    """Raised when creating a tag whose name is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tag '{name}' already exists")


class StorageUnavailableError(CatalogError):
    """Raised when the underlying database fails. Never retried internally."""
