"""Independent surfaces that only communicate through the task store."""
