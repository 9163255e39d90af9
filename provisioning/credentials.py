"""Password generation for new tenant accounts."""

import secrets

PASSWORD_LENGTH = 64


def generate_password() -> str:
    """
    Generate a fresh password for a tenant account.

    Drawn from the operating system's CSPRNG through ``secrets``; nothing about
    the tenant or the clock goes into it.

    Returns:
        64-character lowercase hexadecimal string
    """
    return secrets.token_hex(PASSWORD_LENGTH // 2)
