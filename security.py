import hashlib
import hmac
import secrets

ITERATIONS = 260000

def hash_password(password: str) -> str:
    """
    Salted PBKDF2-SHA256 hash, stored as ``iterations$salt$digest``.
    """
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), ITERATIONS)
    return f"{ITERATIONS}${salt}${digest.hex()}"

def verify_password(password: str, stored: str) -> bool:
    try:
        iterations, salt, expected = stored.split("$")
    except (AttributeError, ValueError):
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)
