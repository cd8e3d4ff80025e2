"""
rota_auth.services

Service-layer package.

Responsibilities:
- Authentication use cases (signup, login, 2FA, logout, account deletion).
- Concrete data store backends behind the domain store interfaces.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on the store interfaces in `rota_auth.domain.data_stores`,
# never on a concrete backend, so tests can swap in the in-memory stores.
