"""Onboarding intake server.

Serves a static onboarding form, persists JSON submissions to disk, relays a
summary to a chat webhook and triggers a local system-event command.
"""

__version__ = "0.1.0"
