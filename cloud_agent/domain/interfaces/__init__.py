"""Domain interfaces package."""
