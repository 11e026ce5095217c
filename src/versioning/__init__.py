"""Version resolution: models, semver wrapper and resolvers."""
