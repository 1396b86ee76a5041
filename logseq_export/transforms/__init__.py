"""Text transforms applied to pages during export."""
