"""
Credential encoding for stored passwords.

WARNING: this is a reversible, unsalted base64 encoding, not a hash. Anyone who can
read the record store can recover every password, and identical passwords encode
identically across users. It is kept because existing records were written this way;
replacing it with a salted one-way hash (argon2/bcrypt) requires re-encoding on login.
"""

import base64
import hmac


def encode_credential(password: str) -> str:
    """Encode a raw password into its stored credential form."""
    return base64.b64encode(password.encode("utf-8")).decode("ascii")


def verify_credential(password: str, credential: str) -> bool:
    """Check a raw password against a stored credential."""
    if password is None or credential is None:
        return False
    return hmac.compare_digest(
        encode_credential(password).encode("ascii"),
        credential.encode("utf-8")
    )
