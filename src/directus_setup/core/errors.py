"""Exception taxonomy for the provisioning pipeline."""

from __future__ import annotations


class DirectusSetupError(Exception):
    """Base class for all provisioning errors."""


class AuthenticationFailure(DirectusSetupError):
    """The credential exchange endpoint rejected the access key."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(
            f"Authentication failed: {status_code}. "
            "Check your access token and Directus URL."
        )
        self.status_code = status_code
        self.body = body


class RequestError(DirectusSetupError):
    """A request to the backend returned a non-success status."""

    def __init__(self, status_code: int, method: str, path: str, body: str = "") -> None:
        super().__init__(self._format(status_code, method, path, body))
        self.status_code = status_code
        self.method = method
        self.path = path
        self.body = body

    def _format(self, status_code: int, method: str, path: str, body: str) -> str:
        return f"HTTP {status_code} on {method} {path}: {body[:500]}"


class InvalidCredential(RequestError):
    """401: the server rejected the bearer token."""

    def _format(self, status_code: int, method: str, path: str, body: str) -> str:
        return f"Invalid token on {method} {path}: token is invalid or expired"


class PermissionDenied(RequestError):
    """403: the token lacks access to the requested resource."""

    def _format(self, status_code: int, method: str, path: str, body: str) -> str:
        return (
            f"Insufficient permissions on {method} {path}: "
            "ensure the token's role has access to collections and items"
        )


class RequestFailed(RequestError):
    """Any other non-2xx response."""


class DependencyResolutionError(DirectusSetupError):
    """A seed record names a parent that the previous tier did not create."""

    def __init__(self, collection: str, field: str, name: str) -> None:
        super().__init__(
            f'Cannot seed {collection}: {field} "{name}" does not match any created record'
        )
        self.collection = collection
        self.field = field
        self.name = name


class DuplicateNameError(DependencyResolutionError):
    """Two records in one tier share the name later tiers resolve by."""

    def __init__(self, collection: str, name: str) -> None:
        DirectusSetupError.__init__(
            self,
            f'Cannot seed {collection}: name "{name}" is used by more than one record',
        )
        self.collection = collection
        self.field = "name"
        self.name = name


class MissingPrerequisite(DirectusSetupError):
    """Collections required for seeding are absent on the backend."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Missing collections: {', '.join(missing)}. Run the collections step first."
        )
        self.missing = list(missing)
