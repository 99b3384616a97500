"""Backend-for-frontend for the school administration portal."""
