"""
Keep Notes Backend - multi-tenant notes, tags and bearer sessions

One core (credentials, tokens, owner-scoped stores, cascades) served by a
REST façade and an RPC façade.
"""

__version__ = "1.0.0"
