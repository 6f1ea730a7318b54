"""Shared settings for the EPG AdZone Validator."""
