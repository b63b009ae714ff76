"""Configuration: settings and database engine."""
