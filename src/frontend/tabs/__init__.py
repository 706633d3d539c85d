"""Config panel tabs."""
