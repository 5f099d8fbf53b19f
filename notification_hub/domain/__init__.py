"""Domain layer: entities and result types shared by every other layer."""
