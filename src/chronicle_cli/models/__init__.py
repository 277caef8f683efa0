"""Domain models: focus engine, analytics aggregator and events."""
