"""
Test suite for the rosterbot Discord bot.

Run all tests:
    pytest

Run signup tests only:
    pytest tests/signup/ -v
"""
