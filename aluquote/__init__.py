"""Aluminium window and door estimating service."""
