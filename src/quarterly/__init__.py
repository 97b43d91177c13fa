"""Quarterly - quarter/year task timeline."""
