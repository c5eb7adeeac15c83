"""Authentication session - a placeholder access gate, not a security boundary."""

import logging
import secrets

from clergy_roster.config import AuthSettings


logger = logging.getLogger(__name__)


def check_credentials(username: str, password: str, auth: AuthSettings) -> bool:
    """Compare against the configured static credential pair."""
    user_ok = secrets.compare_digest(username.encode(), auth.username.encode())
    pass_ok = secrets.compare_digest(password.encode(), auth.password.encode())
    return user_ok and pass_ok


class AuthSession:
    """In-memory logged-in flag, passed to every gated component."""

    def __init__(self, auth: AuthSettings, logged_in: bool = False):
        self._auth = auth
        self.logged_in = logged_in

    def login(self, username: str, password: str) -> bool:
        if check_credentials(username or "", password or "", self._auth):
            self.logged_in = True
            logger.info("Admin signed in")
            return True
        logger.info("Rejected sign-in for %r", username)
        return False

    def logout(self):
        self.logged_in = False
