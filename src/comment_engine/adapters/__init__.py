"""Host adapters that feed editor widgets into the comment engine."""
