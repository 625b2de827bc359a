"""GUI-agnostic core: header data types, ingestion and selection services."""
