"""Test helpers for code that embeds a FeatureRegistry."""
