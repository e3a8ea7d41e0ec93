"""Example handlers used by the tests."""
