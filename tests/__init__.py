"""Test suite for the Eversend client."""
