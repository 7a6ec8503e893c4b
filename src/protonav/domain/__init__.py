"""Domain model for prototype stories."""
