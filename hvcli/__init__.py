"""Hyperview asset management CLI (hvcli)."""
