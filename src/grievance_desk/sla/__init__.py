"""
SLA Module
==========

Bounded Context for service level tracking of employee issues.

Responsibilities:
- Working-time arithmetic on the IST business calendar
- Per-issue response/resolution/escalation breach state
- Turnaround-time and compliance reporting
- Loading SLA targets and holidays from the policy file
"""

__version__ = "1.0.0"
