"""Service interfaces and OCI adapters."""
