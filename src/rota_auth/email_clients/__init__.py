"""
rota_auth.email_clients

Outbound email clients.

Responsibilities:
- Provide `EmailClient` implementations used to deliver 2FA codes.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The auth service depends on the `EmailClient` protocol in
# `rota_auth.domain.data_stores`, not on a provider.
