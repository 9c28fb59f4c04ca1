"""Aggregate statistics over e-shop customers and orders."""
