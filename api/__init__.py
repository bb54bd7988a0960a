"""API package - HTTP routes, middleware, and the Lambda entrypoint"""
