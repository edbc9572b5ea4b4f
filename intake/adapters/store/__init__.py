"""Intake record store adapters.

Implementations:
- FileIntakeStore: one pretty-printed JSON file per record
"""
