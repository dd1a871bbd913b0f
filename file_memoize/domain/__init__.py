"""
Domain layer module.

This module contains the memoization rules that do not depend on any storage
backend.

Key components:
- keys.py: Lookup key derivation from call arguments
- models.py: Load state and cache statistics models
- protocols.py: Protocol definitions for store codecs
- exceptions.py: Package exception hierarchy
"""
