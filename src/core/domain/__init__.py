"""Domain models and errors.

The domain knows nothing about HTTP clients or the CLI: only the build
metadata, the webhook configuration and what happened per URL.
"""
