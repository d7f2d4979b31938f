"""
MSME Compass Services
=====================

Services for the MSME compliance engine.

Services:
- compliance_engine: Profile classification, obligation mapping, and
  implementation timelines
"""

__all__ = [
    "compliance_engine",
]
