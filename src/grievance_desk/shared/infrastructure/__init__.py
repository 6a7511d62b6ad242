"""
Infrastructure Layer
=====================

Low-level technical concerns:
- Logging setup
- YAML configuration loading and hot-reload
"""
