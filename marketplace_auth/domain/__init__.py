"""Domain layer: entities, ports and validation rules (no framework code)."""
