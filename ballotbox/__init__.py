"""Ballot box web application."""
