"""Infrastructure: persistence, identity store client, security."""
