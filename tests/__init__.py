# Threefish Explorer Test Suite
"""
Test suite including:
- Unit tests (word arithmetic, key schedule, MIX, round engine, codec)
- Explorer and integration tests
- Security tests (invalid inputs, diffusion)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
