"""Google sign-in demo server with a per-user copy/paste record."""
