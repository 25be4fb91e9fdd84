"""Loading and building.

- sources  - read + parse per source, sequential and concurrent loading
- builder  - ReviewBuilder entry points
"""
