"""Command dispatch, confirmation and output for the tabctl CLI."""
