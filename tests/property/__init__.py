"""
LECTIO - Property-Based Testing Suite

Hypothesis properties and state machines for location clamping, filter
resolution, history and the navigator.
"""
