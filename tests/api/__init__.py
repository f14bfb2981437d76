"""API tests through the FastAPI app."""
