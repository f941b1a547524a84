"""Entity synthesizers, one module per family of records."""
