"""Typed models for raw feed records, transcoder configuration and output messages."""
