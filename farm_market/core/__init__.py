"""Cross-cutting infrastructure: configuration, logging, errors, storage and middleware."""
