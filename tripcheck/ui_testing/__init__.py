"""UI automation: framework and page objects."""
