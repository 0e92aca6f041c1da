"""
Account policy: who may register, who becomes admin, and which display
names are accepted.

The policy is built from settings (`AccountPolicy.from_settings`) rather than
hardcoded so every environment states its operator addresses explicitly.
"""

from dataclasses import dataclass, field
import re
from typing import FrozenSet, Iterable, Optional

from mukha.api.errors import RestrictedEmailError, ValidationError

DISPLAY_NAME_MAX_LENGTH = 12
DISPLAY_NAME_PATTERN = re.compile(r"[A-Za-z0-9']+")
PASSWORD_MAX_BYTES = 72


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def validate_display_name(display_name: Optional[str]) -> Optional[str]:
    """
    Check a display name against the length and character rules.

    Returns
    -------
    str | None
        The name unchanged, or None for None or "". Profile updates treat
        "" as a request to clear the stored name.

    Raises
    ------
    ValidationError
        Longer than 12 characters or containing anything outside
        ``[A-Za-z0-9']``.
    """
    if not display_name:
        return None
    if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
        raise ValidationError(f"Display name must be at most {DISPLAY_NAME_MAX_LENGTH} characters")
    if not DISPLAY_NAME_PATTERN.fullmatch(display_name):
        raise ValidationError("Display name may only contain letters, digits and apostrophes")
    return display_name


def validate_password(password: str) -> str:
    """Reject passwords bcrypt cannot hash (over 72 bytes once UTF-8 encoded)."""
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return password


def _normalized_set(emails: Iterable[str]) -> FrozenSet[str]:
    return frozenset(normalize_email(e) for e in emails if normalize_email(e))


@dataclass(frozen=True)
class AccountPolicy:
    """
    Registration policy.

    Attributes
    ----------
    bootstrap_admin_emails : frozenset[str]
        Emails granted admin whenever they register.
    restricted_emails : frozenset[str]
        Emails that may never be used for an account.
    first_user_is_admin : bool
        Grant admin to the registrant that finds the user table empty.
    """

    bootstrap_admin_emails: FrozenSet[str] = field(default_factory=frozenset)
    restricted_emails: FrozenSet[str] = field(default_factory=frozenset)
    first_user_is_admin: bool = True

    @classmethod
    def from_settings(cls, settings) -> "AccountPolicy":
        return cls.create(
            bootstrap_admin_emails=settings.BOOTSTRAP_ADMIN_EMAILS,
            restricted_emails=settings.RESTRICTED_EMAILS,
            first_user_is_admin=settings.FIRST_USER_IS_ADMIN,
        )

    @classmethod
    def create(
        cls,
        bootstrap_admin_emails: Iterable[str] = (),
        restricted_emails: Iterable[str] = (),
        first_user_is_admin: bool = True,
    ) -> "AccountPolicy":
        return cls(
            bootstrap_admin_emails=_normalized_set(bootstrap_admin_emails),
            restricted_emails=_normalized_set(restricted_emails),
            first_user_is_admin=first_user_is_admin,
        )

    def check_allowed(self, email: str) -> None:
        """Raise `RestrictedEmailError` for a reserved address."""
        if normalize_email(email) in self.restricted_emails:
            raise RestrictedEmailError()

    def grants_admin(self, email: str, existing_users: int) -> bool:
        if self.first_user_is_admin and existing_users == 0:
            return True
        return normalize_email(email) in self.bootstrap_admin_emails
