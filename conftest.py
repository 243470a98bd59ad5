"""Root conftest so tests can import the src package."""
