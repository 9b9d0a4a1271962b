"""Test suite for the FormState lifecycle engine.

This package contains tests for:
- Transition table (every rule, priority of Fail and Perform, totality)
- Validation capability (function and JSON Schema validators)
- Event and effect values
- FormRuntime dispatch, effect execution and listeners
- End-to-end form scenarios
"""
