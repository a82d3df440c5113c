"""Domain services: credits, generation jobs and prompt vocabulary."""
