"""
Shared Kernel Module
====================

This module contains shared infrastructure used across both bounded
contexts (SLA and Access).

Architecture Pattern: Modular Monolith
- Each module (sla, access) is a bounded context
- Shared kernel contains only generic infrastructure

DO NOT add business logic from SLA or Access to shared kernel.
"""

__version__ = "1.0.0"
