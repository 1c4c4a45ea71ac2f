"""Routing — exact-path route table with an optional default handler.

Routes are registered during setup and frozen into an immutable
lookup table when the app freezes.
"""
