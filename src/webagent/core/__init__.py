"""Core agent logic: tools, registry, assembly."""
