"""Request/response contracts and domain models."""
