"""Domain layer: block records, ports, exceptions. No third-party imports."""
