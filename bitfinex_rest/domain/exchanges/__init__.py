"""Exchange bounded context."""
