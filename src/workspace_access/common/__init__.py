"""Cross-cutting helpers shared by the core engine and the HTTP layer."""
