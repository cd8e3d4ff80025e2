"""
rota_auth.auth

Credential and session primitives.

Responsibilities:
- Argon2id password hashing.
- JWT session issuing/validation backed by the revocation store.
- FastAPI dependency for extracting the caller's session token.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package makes login decisions; that belongs to
# `rota_auth.services.auth_service`.
