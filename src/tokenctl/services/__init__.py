"""Service layer — orchestrates loading, resolution, and result reporting."""
