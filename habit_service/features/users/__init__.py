"""User profiles and account lifecycle."""
