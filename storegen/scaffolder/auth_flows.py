"""Authentication flows emitted into the store index.

``AUTH_FLOWS`` is the table the index template renders from: one entry per
generated flow with its failure-code table.  The classes below model the
runtime contract of those generated flows in Python (shared ``loading`` /
``error`` / ``currentUser`` fields, failure classification, non-fatal
profile merge, and the session-restore listener state machine) so the
contract can be exercised without a browser.

Only one flow is expected to be in flight at a time.  Overlapping flows race
on the shared fields; that is a constraint on callers, not something the
generated code or this model guards against.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from storegen.utils import print_warning


# ---------------------------------------------------------------------------
# Flow table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AuthFlow:
    """One generated authentication flow and how its failures are reported."""

    name: str
    unknown_message: str
    failure_messages: tuple[tuple[str, str], ...] = ()
    fixed_code: Optional[str] = None

    def classify(self, code: Optional[str], message: Optional[str]) -> str:
        """Human-readable message for a failure with *code* and *message*."""
        for known_code, text in self.failure_messages:
            if code == known_code:
                return text
        return message or self.unknown_message

    def error_code(self, code: Optional[str]) -> Optional[str]:
        """Code carried by the re-raised structured failure."""
        return self.fixed_code or code


LOGIN = AuthFlow(
    name="login",
    unknown_message="An unknown authentication error occurred.",
    failure_messages=(
        ("auth/user-not-found", "No user found with this email."),
        ("auth/wrong-password", "Incorrect password."),
        ("auth/invalid-credential", "Invalid email or password."),
        ("auth/too-many-requests", "Too many failed login attempts. Account temporarily locked."),
        ("auth/user-disabled", "This account has been disabled."),
    ),
)

SIGN_UP = AuthFlow(
    name="signUp",
    unknown_message="An unknown registration error occurred.",
    failure_messages=(
        ("auth/email-already-in-use", "This email address is already registered."),
        ("auth/invalid-email", "The email address is not valid."),
        ("auth/weak-password", "The password is too weak. Please choose a stronger password."),
        ("auth/operation-not-allowed", "Email/password accounts are not enabled. Please contact support."),
    ),
)

LOGOUT = AuthFlow(
    name="logout",
    unknown_message="Logout failed",
    fixed_code="auth/logout-failed",
)

PASSWORD_RESET = AuthFlow(
    name="sendPasswordReset",
    unknown_message="An unknown error occurred while sending reset email.",
    failure_messages=(
        ("auth/user-not-found", "No user found with this email address."),
        ("auth/invalid-email", "The email address is not valid."),
    ),
)

PROFILE_UPDATE = AuthFlow(
    name="updateProfile",
    unknown_message="Profile update failed",
    fixed_code="auth/profile-update-failed",
)

CHANGE_PASSWORD = AuthFlow(
    name="changePassword",
    unknown_message="An unknown error occurred while changing password.",
    failure_messages=(
        ("auth/wrong-password", "The current password you entered is incorrect."),
        ("auth/requires-recent-login", "Your session has expired. Please log in again to change your password."),
        ("auth/weak-password", "The new password is too weak. Please choose a stronger password."),
    ),
)

SESSION_RESTORE = AuthFlow(
    name="fetchUser",
    unknown_message="Failed to restore the authentication session.",
)

RESEND_VERIFICATION = AuthFlow(
    name="resendVerificationEmail",
    unknown_message="An unknown error occurred.",
    failure_messages=(
        ("auth/too-many-requests", "Too many requests. Please wait before trying again."),
    ),
)

AUTH_FLOWS: tuple[AuthFlow, ...] = (
    LOGIN,
    SIGN_UP,
    LOGOUT,
    PASSWORD_RESET,
    PROFILE_UPDATE,
    CHANGE_PASSWORD,
    SESSION_RESTORE,
    RESEND_VERIFICATION,
)

AUTH_FLOWS_BY_NAME: dict[str, AuthFlow] = {f.name: f for f in AUTH_FLOWS}


# ---------------------------------------------------------------------------
# Runtime model of the generated flows
# ---------------------------------------------------------------------------


class AuthFlowError(Exception):
    """Structured failure re-raised by a flow: ``{code, message, originalError}``."""

    def __init__(self, code: Optional[str], message: str, original: BaseException) -> None:
        self.code = code
        self.message = message
        self.original = original
        super().__init__(message)


class StoreSession:
    """The shared fields every generated flow reads and writes."""

    def __init__(self) -> None:
        self.loading = False
        self.error: Optional[str] = None
        self.current_user: Optional[dict[str, Any]] = None
        self.auth_initialized = False

    @contextmanager
    def flow(self, flow: AuthFlow) -> Iterator["StoreSession"]:
        """Run the body of *flow* with the generated entry/exit semantics.

        ``loading`` is raised on entry and always lowered on exit, ``error``
        is cleared on entry, and any failure is classified, stored in
        ``error`` and re-raised as :class:`AuthFlowError`.
        """
        self.loading = True
        self.error = None
        try:
            yield self
        except Exception as exc:
            code = getattr(exc, "code", None)
            message = flow.classify(code, str(exc) or None)
            self.error = message
            raise AuthFlowError(flow.error_code(code), message, exc) from exc
        finally:
            self.loading = False

    async def merge_profile(
        self,
        user: dict[str, Any],
        fetch_profile: Optional[Callable[[str], Awaitable[Optional[dict[str, Any]]]]],
    ) -> dict[str, Any]:
        """Merge the primary auth profile into *user*.

        A failing profile fetch is reported as a warning and the auth-only
        record is kept.
        """
        if fetch_profile is None or not user.get("uid"):
            return user
        try:
            profile = await fetch_profile(user["uid"])
        except Exception as exc:
            print_warning(f"User profile fetch failed: {exc}")
            return user
        return {**user, **profile} if profile else user


class RestoreState(str, Enum):
    """Lifecycle of the session-restore listener."""

    UNINITIALIZED = "uninitialized"
    LISTENING = "listening"
    RESOLVED = "resolved"


AuthCallback = Callable[[Optional[dict[str, Any]]], Awaitable[None]]


class SessionRestorer:
    """Session restore (``fetchUser``) with idempotent re-entry.

    The first call subscribes to auth-state changes and waits for the first
    event.  Every later call, whether the listener is still waiting or has
    resolved, returns the last known current user without subscribing again.

    Args:
        session: Shared store fields.
        subscribe: Registers an async callback for auth-state changes and
            returns an unsubscribe function.
        fetch_profile: Optional async lookup of the primary auth profile.
    """

    def __init__(
        self,
        session: StoreSession,
        subscribe: Callable[[AuthCallback], Callable[[], None]],
        fetch_profile: Optional[Callable[[str], Awaitable[Optional[dict[str, Any]]]]] = None,
    ) -> None:
        self.session = session
        self._subscribe = subscribe
        self._fetch_profile = fetch_profile
        self.state = RestoreState.UNINITIALIZED
        self.unsubscribe: Optional[Callable[[], None]] = None
        self._first_event: Optional[asyncio.Future[Optional[dict[str, Any]]]] = None

    async def restore(self) -> Optional[dict[str, Any]]:
        """Return the current user, subscribing on the first call only."""
        if self.state is not RestoreState.UNINITIALIZED:
            return self.session.current_user

        self.state = RestoreState.LISTENING
        self.session.loading = True
        self.session.error = None
        self._first_event = asyncio.get_running_loop().create_future()
        self.unsubscribe = self._subscribe(self._on_auth_state_changed)
        return await self._first_event

    async def _on_auth_state_changed(self, auth_user: Optional[dict[str, Any]]) -> None:
        try:
            if auth_user:
                self.session.current_user = await self.session.merge_profile(
                    dict(auth_user), self._fetch_profile
                )
            else:
                self.session.current_user = None
        except Exception as exc:
            self.session.current_user = None
            self.session.error = SESSION_RESTORE.classify(getattr(exc, "code", None), str(exc))
        finally:
            if self.state is RestoreState.LISTENING:
                self.state = RestoreState.RESOLVED
                self.session.auth_initialized = True
                self.session.loading = False
            if self._first_event is not None and not self._first_event.done():
                self._first_event.set_result(self.session.current_user)

    def stop(self) -> None:
        """Drop the listener; the next :meth:`restore` subscribes afresh."""
        if self.unsubscribe is not None:
            self.unsubscribe()
        self.unsubscribe = None
        self.state = RestoreState.UNINITIALIZED
