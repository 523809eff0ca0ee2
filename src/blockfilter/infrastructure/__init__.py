"""Infrastructure layer: default implementations of domain ports."""
