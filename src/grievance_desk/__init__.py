"""
Grievance Desk
==============

Access policy and SLA core of the employee grievance desk.

Bounded contexts:
- access: role-based permissions with city scoping
- sla: business-hours SLA tracking and turnaround reporting
"""

__version__ = "1.0.0"
