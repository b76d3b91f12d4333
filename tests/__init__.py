"""
Test suite for invocli

Contains:
- tests/unit/          : Unit tests for the core math, models, inputs, views and CLI
"""
