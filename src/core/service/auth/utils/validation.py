"""
Input validation for signup and login fields.
"""

import re

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

# At least 8 characters from letters, digits and a small symbol set,
# with at least one letter and one digit
PASSWORD_PATTERN = re.compile(r'^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d@$!%*#?&]{8,}$')


def is_valid_email(email: str) -> bool:
    """Check `local@domain.tld` shape: no whitespace, one '@', a '.' after it."""
    if not isinstance(email, str):
        return False
    return bool(EMAIL_PATTERN.fullmatch(email))


def is_valid_password(password: str) -> bool:
    """Check length >= 8 with at least one ASCII letter and one digit."""
    if not isinstance(password, str):
        return False
    return bool(PASSWORD_PATTERN.fullmatch(password))
