"""FastAPI surface for list controllers."""
