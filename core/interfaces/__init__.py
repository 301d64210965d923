"""Abstract interfaces for the core layer."""
