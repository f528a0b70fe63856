from __future__ import annotations

import hmac


def is_valid_bearer(auth_header: str | None, expected_token: str) -> bool:
    if not auth_header:
        return False
    scheme, _, token = auth_header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token:
        return False
    return hmac.compare_digest(token.strip().encode(), expected_token.encode())
