"""Infrastructure layer: YAML storage and git."""
