"""Adapters that build Resources from, and write them back to, real storage."""
