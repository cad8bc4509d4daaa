"""scripthost application layer: settings and HTTP status routes."""
