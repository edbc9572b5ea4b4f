"""External adapters for the intake server.

This package contains all external dependencies (filesystem, HTTP clients,
subprocesses, the HTTP listener) and provides implementations of the core
port interfaces.

Adapter Organization:

- store/: Persistence of intake records (JSON files)
- notification/: Chat webhook and local system-event notifiers
- web/: HTTP server for the form and the submit endpoint
"""
