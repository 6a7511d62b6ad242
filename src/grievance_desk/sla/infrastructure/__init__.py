"""
SLA Infrastructure Layer
=========================

Infrastructure implementations for SLA tracking:
- External: policy file loading with hot-reload
"""

from grievance_desk.sla.infrastructure.external import SLAConfigManager

__all__ = [
    "SLAConfigManager",
]
