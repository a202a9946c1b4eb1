"""Infrastructure layer: persistence, session stores, auth primitives and the HTTP API."""
