"""Services implementing each jetsam command."""
