"""
Utilities Package

Helper functions used across the application:
- pagination.py: page/limit normalization and pagination metadata
- time.py: UTC timestamps for models and error envelopes
"""
