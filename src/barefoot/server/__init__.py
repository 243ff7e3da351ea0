"""ASGI host internals: return-value negotiation, errors, sending."""
