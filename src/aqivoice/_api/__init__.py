"""Provider endpoint modules."""
