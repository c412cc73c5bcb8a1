# app/services/auth_service.py
"""
Login: password sign-in against the backend, with a fallback to the legacy
verify_user_password RPC whenever sign-in fails for any reason other than a
missing backend configuration.
"""

from dataclasses import dataclass, field
from typing import Optional

from app.errors import ValidationError, BackendError, BackendNotInitializedError, NotFoundError
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class LoginResult:
    success: bool
    message: str
    legacy: bool = False
    session: Optional[dict] = field(default=None, repr=False)

    @property
    def access_token(self) -> Optional[str]:
        return (self.session or {}).get("access_token")


def _legacy_login(backend, email: str, password: str) -> LoginResult:
    try:
        rows = backend.rpc("verify_user_password", {"in_email": email, "in_password": password})
    except BackendNotInitializedError as e:
        logger.error(f"[AUTH] Legacy verification unavailable for {email}: {e.message}")
        return LoginResult(False, "Login failed.")
    except BackendError as e:
        logger.warning(f"[AUTH] Legacy verification refused for {email}: {e.message}")
        return LoginResult(False, "Invalid email or password.")

    if not rows or not rows[0].get("valid"):
        logger.info(f"[AUTH] Rejected login for {email}")
        return LoginResult(False, "Invalid email or password.")
    logger.info(f"[AUTH] {email} signed in (legacy)")
    return LoginResult(True, "Login successful (legacy)!", legacy=True)


def login(backend, email: str, password: str) -> LoginResult:
    if not email or not password:
        raise ValidationError("Please fill in all fields")

    try:
        session = backend.sign_in_with_password(email, password)
    except BackendNotInitializedError as e:
        logger.error(f"[AUTH] Sign-in unavailable for {email}: {e.message}")
        return LoginResult(False, "Login failed. Please try again.")
    except BackendError as e:
        # refused credentials, auth-service outages and network errors all get the legacy check
        logger.info(f"[AUTH] Sign-in failed for {email} ({e.message}), trying legacy verification")
        return _legacy_login(backend, email, password)

    if not session:
        return _legacy_login(backend, email, password)
    logger.info(f"[AUTH] {email} signed in")
    return LoginResult(True, "Login successful!", session=session)


def demo_login(backend, demo_email: Optional[str], demo_password: Optional[str]) -> LoginResult:
    if not demo_email:
        raise NotFoundError("No demo account configured")
    return login(backend, demo_email, demo_password or "")
