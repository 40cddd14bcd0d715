"""Configuration, coordinate transforms, geometry and error kinds."""
