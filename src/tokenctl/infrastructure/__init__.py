"""Infrastructure layer — token file I/O.

This layer depends on stdlib and third-party parsers (ruamel.yaml).
It must never import from services, commands, or output.
"""
