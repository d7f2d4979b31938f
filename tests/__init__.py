"""
MSME Compass Test Suite
=======================

Test organization:
- tests/unit/                        - Shared configuration and logging
- tests/services/compliance_engine/  - Compliance engine

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=services          # With coverage
"""
