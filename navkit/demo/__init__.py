"""Demo app: assets and issues feature modules wired through the coordinator."""
