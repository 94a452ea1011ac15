"""HTTP API for Stormtrooper."""
