"""Domain pillars for the tree engine: json, ui, support, infra."""
