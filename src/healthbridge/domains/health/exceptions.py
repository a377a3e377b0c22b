"""Error taxonomy for the health domain.

Expected absences (no matching FHIR resource type, an unsupported metric on
read, no active workout) are not errors and are reported as ``None``.
These exceptions are reserved for failures. Every one carries a readable
message and, where there is one, the underlying cause via ``__cause__``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from healthbridge.domains.health.taxonomy.data_types import HealthDataType, Platform
    from healthbridge.domains.health.taxonomy.permissions import AccessType, Permission

PREVIEW_LIMIT = 200


class HealthBridgeError(Exception):
    """Base class for all health domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CapabilityMismatchError(HealthBridgeError):
    """Operation requested on a data type the platform cannot serve."""

    def __init__(
        self,
        data_type: HealthDataType,
        platform: Platform,
        access_type: AccessType,
    ) -> None:
        super().__init__(
            f"{platform.value} cannot {access_type.value.lower()} {data_type.value}"
        )
        self.data_type = data_type
        self.platform = platform
        self.access_type = access_type


class PermissionDeniedError(HealthBridgeError):
    """Operation attempted without a granted permission."""

    def __init__(self, permissions: Iterable[Permission]) -> None:
        self.permissions = frozenset(permissions)
        super().__init__(
            "Permission denied for: " + ", ".join(sorted(str(p) for p in self.permissions))
        )


class ParseError(HealthBridgeError):
    """A clinical document could not be decoded.

    Attributes:
        input_preview: At most the first 200 characters of the input.
        cause: The decoding error, also available as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        input_preview: str = "",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.input_preview = input_preview[:PREVIEW_LIMIT]
        self.cause = cause


class InvalidTransitionError(HealthBridgeError):
    """Workout lifecycle call made from a state that does not permit it."""

    def __init__(self, operation: str, state: str) -> None:
        super().__init__(f"Cannot {operation} a workout session that is {state}")
        self.operation = operation
        self.state = state


class SessionStartError(HealthBridgeError):
    """A workout session could not be started."""


class SessionOperationError(HealthBridgeError):
    """The platform failed a workout lifecycle transition."""

    def __init__(self, operation: str, session_id: str, detail: str = "") -> None:
        message = f"Failed to {operation} workout session {session_id}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.operation = operation
        self.session_id = session_id


class AdapterError(HealthBridgeError):
    """Opaque failure surfaced by the native platform adapter."""
