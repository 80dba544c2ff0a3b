"""End-to-end scenario tests for the JA4H middleware.

Each scenario runs a FastAPI application behind the ASGI adapter and checks
what the application and the client observe.
"""
