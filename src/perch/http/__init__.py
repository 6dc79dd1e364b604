"""HTTP collaborators — request shape and path-segment encoding."""
