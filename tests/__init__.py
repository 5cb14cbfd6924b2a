"""
Test suite for the midlife wealth levy model

Contains:
- tests/unit/          : Unit tests for individual modules and the pipeline
"""
