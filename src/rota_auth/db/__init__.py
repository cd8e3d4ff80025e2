"""
rota_auth.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the users ORM model and engine/session setup.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Only the credential store is relational; revocation and 2FA state live in
# the TTL cache backends.
