"""Service layer: composes domain pieces and returns ServiceResult."""
