"""Engine layer: strategy evaluation and guarded value cells."""
