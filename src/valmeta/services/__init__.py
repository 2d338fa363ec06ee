"""Service layer: the descriptor builder and form-level operations."""
