"""Metadata service: scrapes title, description and favicon for short links."""
