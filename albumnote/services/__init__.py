"""Collaborators that talk to the outside world."""
