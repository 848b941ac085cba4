"""Domain layer - pure Python, no framework imports."""
