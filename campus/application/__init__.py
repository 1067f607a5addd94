"""Application layer: DTOs, ports (Protocols), services and use cases."""
