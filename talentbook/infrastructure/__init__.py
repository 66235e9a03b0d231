"""Infrastructure layer: persistence, security and delivery channels."""
