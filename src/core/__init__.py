"""Core components for aggregation authorization management.

This module contains the foundational components: AWS client
management and configuration handling.
"""
