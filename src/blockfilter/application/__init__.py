"""Application layer: filtering services and reporters."""
