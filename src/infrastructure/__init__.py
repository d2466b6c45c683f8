"""Infrastructure adapters (file I/O) for the domain layer."""
