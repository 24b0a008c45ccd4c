"""Dense analytics array layout and the views read from it."""
