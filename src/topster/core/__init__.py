"""Chart data model and pure layout geometry."""
