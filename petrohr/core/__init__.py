"""Cross-cutting infrastructure: settings, logging, auth."""
