"""Configuration layer: settings models, file discovery, and logging setup."""
