"""Task and dashboard management API with drag-and-drop ordering."""
