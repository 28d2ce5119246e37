"""Spreadsheet reading and the static chart of accounts."""
