"""Framework-free core: data models, reference deck and settings storage."""
