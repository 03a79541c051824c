"""Configuration for jsonsieve extraction."""
