"""
Authentication application.

Supplies the authenticated identity the billing app works with: an
email-identified User whose UUID primary key is the opaque user id embedded
in checkout metadata. Token issuance is handled by SimpleJWT (see urls.py).

Usage:
    from authentication.models import User
"""
