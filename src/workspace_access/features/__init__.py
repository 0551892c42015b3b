"""Feature packages: role catalog, project scope and workspace scope."""
