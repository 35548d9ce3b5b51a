"""Cross-cutting infrastructure: configuration, errors and logging."""
