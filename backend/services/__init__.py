"""
Services used by the arena tooling (ratings).
"""
