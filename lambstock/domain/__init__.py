"""Domain layer: inventory models, error taxonomy and collaborator interfaces."""
