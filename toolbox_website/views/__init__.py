"""Page views. Each module is imported on demand by the view loader."""
