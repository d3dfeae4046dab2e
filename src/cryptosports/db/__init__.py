"""In-memory entity store and its records."""
