"""
Session synchronizer.

Keeps one process-wide view of who is signed in to the Supabase client.
Two sources feed it: the auth state change subscription (sign-in, sign-out,
token refresh) and a single get_session() call made at start. Either may
report first and either may repeat itself, so every report goes through one
setter that replaces the snapshot only when it differs. The last report wins.

Consumers read `state` or register a listener; they never write.
"""

import logging
import threading
from typing import Any, Callable, List, Optional, Union

from supabase import Client

from app.config.permissions_config import Role, SIGNUP_ROLES
from app.config.settings import settings
from app.core import notifications
from app.core.notifications import Notification
from app.modules.auth.email_alias import to_submission_email, is_admin_alias
from app.modules.auth.roles import resolve_role_from_metadata
from app.modules.auth.schemas import AuthResult, SessionInfo, SessionState, SessionUser

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]
Notifier = Callable[[Notification], None]


def mirror_user(user: Any) -> Optional[SessionUser]:
    if user is None:
        return None
    return SessionUser(
        id=str(user.id),
        email=getattr(user, "email", None),
        user_metadata=dict(getattr(user, "user_metadata", None) or {}),
    )


def mirror_session(session: Any) -> Optional[SessionInfo]:
    """Copy the SDK session into an immutable local snapshot"""
    if session is None:
        return None
    return SessionInfo(
        access_token=session.access_token,
        refresh_token=getattr(session, "refresh_token", None),
        expires_at=getattr(session, "expires_at", None),
        user=mirror_user(getattr(session, "user", None)),
    )


class SessionSynchronizer:
    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None):
        self.supabase = supabase
        self._notifier = notifier
        self._lock = threading.Lock()
        self._state = SessionState()
        self._listeners: List[StateListener] = []
        self._subscription = None

    def __enter__(self) -> "SessionSynchronizer":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def user(self) -> Optional[SessionUser]:
        return self.state.user

    @property
    def session(self) -> Optional[SessionInfo]:
        return self.state.session

    @property
    def resolving(self) -> bool:
        return self.state.resolving

    @property
    def started(self) -> bool:
        return self._subscription is not None

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state changes. Returns a function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove

    def start(self) -> None:
        """Subscribe to auth changes, then fetch the current session once"""
        if self._subscription is not None:
            return
        self._subscription = self.supabase.auth.on_auth_state_change(self._on_auth_change)
        logger.info("Subscribed to Supabase auth state changes")
        try:
            session = self.supabase.auth.get_session()
        except Exception as e:
            # Nothing was learned; only end the resolving phase
            logger.error(f"Error fetching initial session: {e}")
            self._set_resolved()
            return
        self._apply("INITIAL_FETCH", session)

    def close(self) -> None:
        """Release the auth subscription. Safe to call more than once."""
        with self._lock:
            subscription, self._subscription = self._subscription, None
            self._listeners.clear()
        if subscription is not None:
            subscription.unsubscribe()
            logger.info("Unsubscribed from Supabase auth state changes")

    def _on_auth_change(self, event: Any, session: Any) -> None:
        # May run on the SDK's token refresh thread
        self._apply(getattr(event, "value", event), session)

    def _apply(self, source: str, session: Any) -> None:
        mirrored = mirror_session(session)
        user = mirrored.user if mirrored else None
        role = resolve_role_from_metadata(user.email, user.user_metadata) if user else None
        self._replace(SessionState(user=user, session=mirrored, resolving=False, role=role), source)

    def _set_resolved(self) -> None:
        # Check and swap under one lock so a concurrent report is never overwritten
        with self._lock:
            if not self._state.resolving:
                return
            new_state = self._state.model_copy(update={"resolving": False})
            self._state = new_state
            listeners = list(self._listeners)
        self._publish(new_state, listeners, "INITIAL_FETCH_FAILED")

    def _replace(self, new_state: SessionState, source: str) -> None:
        with self._lock:
            if new_state == self._state:
                return
            self._state = new_state
            listeners = list(self._listeners)
        self._publish(new_state, listeners, source)

    def _publish(self, new_state: SessionState, listeners: List[StateListener], source: str) -> None:
        logger.debug(f"Session state updated from {source}: user={new_state.user.id if new_state.user else None}")
        for listener in listeners:
            try:
                listener(new_state)
            except Exception:
                logger.exception("Session state listener failed")

    def _notify(self, notification: Notification) -> None:
        if self._notifier is not None:
            self._notifier(notification)

    def _failed(self, title: str, error: Union[Exception, str]) -> AuthResult:
        notification = notifications.failure(title, error)
        self._notify(notification)
        return AuthResult(ok=False, error=notification.description, notification=notification)

    def sign_up(self, email: str, password: str, full_name: str, role: Union[Role, str]) -> AuthResult:
        """Register a client or creator. Never raises; failures come back in the result."""
        try:
            role = Role(role)
        except ValueError:
            role = None
        if role not in SIGNUP_ROLES:
            return self._failed("Sign up failed", "Account type must be client or creator")

        admin = is_admin_alias(email)
        try:
            self.supabase.auth.sign_up({
                "email": to_submission_email(email),
                "password": password,
                "options": {
                    "email_redirect_to": settings.email_redirect_url,
                    "data": {
                        "full_name": full_name,
                        "user_type": role.value,
                        "original_email": email,
                    },
                },
            })
        except Exception as e:
            logger.warning(f"Sign up failed for {email}: {e}")
            return self._failed("Sign up failed", e)

        notification = notifications.info(
            "Success!",
            "Admin account created successfully! You can now sign in directly."
            if admin
            else "Please check your email to confirm your account.",
        )
        self._notify(notification)
        logger.info(f"Signed up {email} as {role.value}")
        return AuthResult(ok=True, notification=notification)

    def sign_in(self, email: str, password: str) -> AuthResult:
        """Password sign-in. Local state follows through the subscription."""
        try:
            response = self.supabase.auth.sign_in_with_password({
                "email": to_submission_email(email),
                "password": password,
            })
        except Exception as e:
            logger.warning(f"Sign in failed for {email}: {e}")
            return self._failed("Sign in failed", e)

        notification = None
        if is_admin_alias(email):
            notification = notifications.info("Admin login successful", "Welcome to the admin dashboard!")
            self._notify(notification)
        logger.info(f"Signed in {email}")
        return AuthResult(
            ok=True,
            notification=notification,
            session=mirror_session(getattr(response, "session", None)),
        )

    def sign_out(self) -> AuthResult:
        """Ask Supabase to end the session. Does not touch local state."""
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return self._failed("Sign out failed", e)
        return AuthResult(ok=True)
