"""
Crosscutting concerns: config, logging, errors, metrics, timing.
"""
