"""Backoffice Application Package — admin and storefront JSON API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
