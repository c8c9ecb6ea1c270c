"""Error taxonomy for traversal, listing and deletion.

Every operation either returns a fully materialized result or raises
exactly one of these. The first error wins and aborts the enclosing
operation.
"""


class TraversalError(Exception):
    """Base exception for traversal-related errors.

    Attributes:
        path: Filesystem path the error relates to.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class RootNotFoundError(TraversalError):
    """Raised when the traversal root does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f'File does not exist: "{path}"', path)


class RootNotDirectoryError(TraversalError):
    """Raised when the traversal root exists but is not a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Must be a directory: {path}", path)


class RecursiveSymlinkError(TraversalError):
    """Raised when a symlink points at another symlink.

    Only one hop of link resolution is supported; chains are rejected
    rather than followed.
    """

    def __init__(self, path: str, link_target: str) -> None:
        super().__init__(f"Recursive symbolic link: {path} -> {link_target}", path)
        self.link_target = link_target


class TraversalIOError(TraversalError):
    """Raised when an underlying filesystem call fails.

    Attributes:
        cause: The original OSError.
    """

    def __init__(self, path: str, cause: OSError) -> None:
        reason = cause.strerror or str(cause)
        super().__init__(f"{reason}: {path}", path)
        self.cause = cause


class TraversalCancelledError(TraversalError):
    """Raised to an awaiting caller when its traversal was cancelled."""

    def __init__(self, path: str | None = None) -> None:
        super().__init__("Traversal cancelled", path)
