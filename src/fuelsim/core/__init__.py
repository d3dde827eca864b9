"""Core infrastructure: configuration, logging, events and stepping."""
