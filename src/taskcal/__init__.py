"""taskcal - recurring task calendar."""
