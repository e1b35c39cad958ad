"""Static reference data shared by the seed helpers and the initial migration."""
