"""Registry, validation, dispatch and transport core."""
