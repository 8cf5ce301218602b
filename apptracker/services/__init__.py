"""Services - credential and token handling."""
