"""Application layer: use cases orchestrating the domain and infrastructure."""
