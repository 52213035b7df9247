"""Request logging and error handling middleware."""
