"""Test suite for the intake server.

Organized into three categories:

1. core/: Unit tests for labels, messages and the submission pipeline
   - Uses in-memory fakes for ports

2. adapters/: Tests for adapter implementations
   - Filesystem store against a temporary directory
   - Webhook adapter against an httpx mock transport
   - System event adapter with subprocess patched
   - HTTP server on an ephemeral port

3. fakes/: Port implementations for testing
"""
