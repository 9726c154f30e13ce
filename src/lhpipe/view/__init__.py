"""Selection and presentation of an effective pipeline."""
