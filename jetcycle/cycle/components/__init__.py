"""Gas-path component models for the engine cycle."""
