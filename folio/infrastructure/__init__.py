"""Infrastructure layer: database gateway and repositories."""
