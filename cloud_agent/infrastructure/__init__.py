"""Infrastructure layer - configuration and outbound HTTP."""
