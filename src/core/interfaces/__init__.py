"""Interfaces of the core.

Contracts (Protocol) implemented by the adapters.
"""
