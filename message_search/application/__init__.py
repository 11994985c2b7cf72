"""Application layer: collaborator interfaces, DTOs and use cases."""
