"""HTTP server for the onboarding form and submission endpoint."""
