"""TaskHub: team projects and tasks over an async JSON API."""
