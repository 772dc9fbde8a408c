"""Built-in Cloud Agent tool plugins."""
