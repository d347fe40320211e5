"""Infrastructure layer: signing, schema extraction, HTTP and the client."""
