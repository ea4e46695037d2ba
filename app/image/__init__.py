"""Upstream image-provider package.

Scope:
    Provides deployment configuration, the Hugging Face text-to-image client
    and helpers translating upstream responses (error classification, base64
    encoding) for the core engine.

Non-goals:
    - No retries or polling.
    - No caching of generated images.
"""
