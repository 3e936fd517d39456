"""Service layer: extraction post-processing and the intake collaborators."""
