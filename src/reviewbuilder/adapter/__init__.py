"""Adapters for the IO boundary.

- storage     - raw text for a named source
- serializer  - JSON text to validated collections
"""
