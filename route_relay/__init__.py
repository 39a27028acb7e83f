"""OpenAPI route relay service package."""
