"""
Shared admin credential check.
"""

import hmac


def _matches(supplied: str, expected: str) -> bool:
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def verify_admin_credentials(
    email: str,
    password: str,
    admin_email: str,
    admin_password: str,
) -> bool:
    """
    Compare a login attempt against the configured admin credential.

    Emails compare case-insensitively. Both comparisons always run so the
    response time does not reveal which one failed.
    """
    email_ok = _matches(email.strip().lower(), admin_email.strip().lower())
    password_ok = _matches(password, admin_password)
    return email_ok and password_ok
