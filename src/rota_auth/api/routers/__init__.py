"""
rota_auth.api.routers

HTTP routers for the authentication service.
"""
