"""Acting-principal handling. Authentication itself happens upstream of this service."""
