"""
Access Module
=============

Bounded Context for role-based access control with city scoping.

Responsibilities:
- Resolve a role's permissions from the injected role table
- Resolve the cities an actor may see
- Filter employees, dashboard users and issues to that scope
- Guard request handlers with permission checks
"""

__version__ = "1.0.0"
