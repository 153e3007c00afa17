"""
HTTP API layer: FastAPI routers for the ward service.
"""
