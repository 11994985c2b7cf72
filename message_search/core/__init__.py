"""Core: configuration, exception handlers, application lifespan."""
