"""Core domain logic: exceptions and pure progress helpers."""
