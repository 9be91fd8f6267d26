"""Application layer - countdown and shortlist use cases."""
