"""ID and credential generators (CUID2, temporary passwords)."""

import secrets
import string

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_temporary_password(length: int = 16) -> str:
    """Generate a cryptographically secure password with guaranteed complexity.

    Ensures at least one lowercase, one uppercase, one digit, and one
    special character; remaining positions filled from the full alphabet,
    then shuffled.
    """
    special = "!@#$%^&*-_=+"
    alphabet = string.ascii_letters + string.digits + special
    rng = secrets.SystemRandom()
    chars = [
        rng.choice(string.ascii_lowercase),
        rng.choice(string.ascii_uppercase),
        rng.choice(string.digits),
        rng.choice(special),
    ]
    chars.extend(rng.choice(alphabet) for _ in range(max(0, length - 4)))
    rng.shuffle(chars)
    return "".join(chars)
