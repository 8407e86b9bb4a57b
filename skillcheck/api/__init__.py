"""HTTP adapter binding card controls to the check manager."""
