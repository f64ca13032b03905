"""Contains the tests for the models."""
