"""Pipeline resolution: the resolver interface and the local uses resolver."""
