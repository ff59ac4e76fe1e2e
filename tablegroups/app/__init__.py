"""Application boundary of the group manager (collaborator ports)."""
