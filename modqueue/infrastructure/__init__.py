"""Infrastructure layer: storage adapters, stubs, logging and metrics."""
