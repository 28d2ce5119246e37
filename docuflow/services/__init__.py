"""Import, inference and batch orchestration services."""
