"""Notification adapters fired after an intake is persisted.

Implementations:
- Discord-style chat webhook (embed message over HTTPS)
- Local system event (external command with a text summary)
"""
