"""Configuration, logging, error handling, and identifier encoding."""
