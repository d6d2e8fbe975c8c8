"""Cross-cutting concerns: logging, errors, security and middleware."""
