"""Application ports: repository and service Protocols."""
