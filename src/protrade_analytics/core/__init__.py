"""Domain models, enumerations, configuration and errors."""
