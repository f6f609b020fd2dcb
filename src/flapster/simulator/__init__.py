"""Desktop front end for FLAPSTER (pygame)."""
