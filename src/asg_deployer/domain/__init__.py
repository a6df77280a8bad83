"""Domain layer - deployment models, ports and exceptions."""
