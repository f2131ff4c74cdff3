"""Vehicle import tax calculator bot."""
